from __future__ import annotations

import json

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser, Permission
from django.core.cache import cache
from django.core.exceptions import PermissionDenied
from django.core.management import CommandError, call_command
from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings

from apps.core import hooks
from apps.core.models import Option
from apps.core.options import OptionStore, option_cache_key
from apps.core.settings_api import OptionsForm, SettingsRegistry, user_can
from apps.core.utils.sanitize import strip_markup, strip_slashes
from apps.core.views import error_403_view

User = get_user_model()


class SanitizeTests(SimpleTestCase):
    def test_strip_markup_removes_tags(self):
        self.assertEqual(strip_markup("<b>XYZ</b>"), "XYZ")
        self.assertEqual(strip_markup("<!-- note -->abc"), "abc")

    def test_strip_markup_removes_encoded_tags(self):
        self.assertEqual(strip_markup("&lt;b&gt;X&lt;/b&gt;"), "X")
        self.assertNotIn("<", strip_markup("&amp;lt;script&amp;gt;x"))

    def test_strip_markup_keeps_plain_text(self):
        self.assertEqual(strip_markup("  a & b  "), "a & b")
        self.assertEqual(strip_markup("abc-123_XYZ"), "abc-123_XYZ")

    def test_strip_markup_is_idempotent(self):
        for value in ["<b>XYZ</b>", "a &amp; b", "&lt;i&gt;t&lt;/i&gt;", 'x"y', "a < b"]:
            once = strip_markup(value)
            self.assertEqual(strip_markup(once), once)

    def test_strip_markup_deeply_encoded(self):
        value = "&" + "amp;" * 12 + "lt;b&gt;X"
        once = strip_markup(value)
        self.assertEqual(once, "X")
        self.assertEqual(strip_markup(once), once)

    def test_strip_markup_non_string(self):
        self.assertEqual(strip_markup(None), "")
        self.assertEqual(strip_markup(42), "")

    def test_strip_slashes_only_touches_escaped_quotes(self):
        raw = '<script src=\\"a.js\\"></script>\\n'
        self.assertEqual(strip_slashes(raw), '<script src="a.js"></script>\\n')
        self.assertEqual(strip_slashes(None), "")


class OptionStoreTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.store = OptionStore()

    def test_get_missing_returns_default(self):
        self.assertIsNone(self.store.get("missing"))
        self.assertEqual(self.store.get("missing", {}), {})

    def test_set_overwrites_whole_value(self):
        self.store.set("k", {"a": "1", "b": "2"})
        self.store.set("k", {"a": "3"})
        self.assertEqual(self.store.get("k"), {"a": "3"})
        self.assertEqual(Option.objects.filter(name="k").count(), 1)

    def test_delete(self):
        self.store.set("k", {"a": "1"})
        self.assertTrue(self.store.delete("k"))
        self.assertFalse(self.store.delete("k"))
        self.assertIsNone(self.store.get("k"))

    def test_reads_are_cached(self):
        self.store.set("k", {"a": "1"})
        self.store.get("k")
        self.assertEqual(cache.get(option_cache_key("k")), {"a": "1"})

    def test_model_save_invalidates_cache(self):
        self.store.set("k", {"a": "1"})
        self.store.get("k")
        option = Option.objects.get(name="k")
        option.value = {"a": "2"}
        option.save()
        self.assertEqual(self.store.get("k"), {"a": "2"})


@override_settings(ADMIN_AREA_PREFIXES=("/admin/", "/options/"))
class HookTests(TestCase):
    def setUp(self) -> None:
        self.factory = RequestFactory()

    def test_is_admin_request(self):
        self.assertTrue(hooks.is_admin_request(self.factory.get("/options/x/")))
        self.assertTrue(hooks.is_admin_request(self.factory.get("/admin/")))
        self.assertFalse(hooks.is_admin_request(self.factory.get("/")))
        self.assertFalse(hooks.is_admin_request(None))

    def test_collect_head_skips_failing_receivers(self):
        def good(sender, **kwargs):
            return '<meta name="x" content="y" />'

        def bad(sender, **kwargs):
            raise RuntimeError("boom")

        hooks.head_render.connect(good, dispatch_uid="test.good")
        hooks.head_render.connect(bad, dispatch_uid="test.bad")
        try:
            with self.assertLogs("apps.core.hooks", level="ERROR"):
                html = hooks.collect_head(self.factory.get("/"))
        finally:
            hooks.head_render.disconnect(dispatch_uid="test.good")
            hooks.head_render.disconnect(dispatch_uid="test.bad")
        self.assertIn('<meta name="x" content="y" />', html)


class SettingsRegistryTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.registry = SettingsRegistry()
        self.store = OptionStore()

    def _page(self):
        page = self.registry.add_options_page("demo", "Demo Options", "Demo", "manage_options")
        self.registry.add_settings_section("main", "Main", "demo", description="Main section")
        self.registry.add_settings_field(
            "title", "Title", "demo", "main", forms.CharField(required=False)
        )
        return page

    def test_unknown_section_raises(self):
        self._page()
        with self.assertRaises(LookupError):
            self.registry.add_settings_field("x", "X", "demo", "nope", forms.CharField())

    def test_unknown_page_raises(self):
        with self.assertRaises(LookupError):
            self.registry.enqueue_style("nope", "style")

    def test_reregistering_replaces(self):
        self._page()
        self._page()
        page = self.registry.get_page("demo")
        self.assertEqual(list(page.sections), ["main"])
        self.assertEqual(list(page.sections["main"].fields), ["title"])

    def test_reregistering_page_keeps_sections_and_fields(self):
        first = self._page()
        page = self.registry.add_options_page("demo", "Demo Settings", "Demo", "manage_options")
        self.assertIs(page, first)
        self.assertEqual(page.page_title, "Demo Settings")
        self.assertEqual(list(page.sections["main"].fields), ["title"])
        section = self.registry.add_settings_section("main", "Renamed", "demo")
        self.assertEqual(section.title, "Renamed")
        self.assertEqual(list(section.fields), ["title"])

    def test_page_styles_only_registered_handles(self):
        page = self._page()
        self.registry.register_style("demo-css", "demo/admin.css")
        self.registry.enqueue_style("demo", "demo-css")
        self.registry.enqueue_style("demo", "missing-css")
        self.assertEqual(self.registry.page_styles(page), ["demo/admin.css"])

    def test_form_uses_registered_fields(self):
        page = self._page()
        form = OptionsForm(page, data={"opt-title": "Hello"}, prefix="opt")
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data, {"title": "Hello"})
        sections = list(form.sections())
        self.assertEqual(sections[0][0].title, "Main")
        self.assertEqual([bf.name for bf in sections[0][1]], ["title"])

    def test_group_save_sanitizes_and_stores(self):
        group = self.registry.register_setting(
            "demo",
            "demo-option",
            lambda raw: {"title": str((raw or {}).get("title", "")).upper()},
            store=self.store,
        )
        group.save({"title": "hello"})
        self.assertEqual(self.store.get("demo-option"), {"title": "HELLO"})
        self.assertEqual(group.current(), {"title": "HELLO"})


class CapabilityTests(TestCase):
    def test_anonymous_cannot(self):
        self.assertFalse(user_can(AnonymousUser(), "manage_options"))

    def test_plain_user_cannot(self):
        user = User.objects.create_user(username="u", password="pass12345")
        self.assertFalse(user_can(user, "manage_options"))

    def test_user_with_permission_can(self):
        user = User.objects.create_user(username="editor", password="pass12345")
        user.user_permissions.add(
            Permission.objects.get(codename="manage_options", content_type__app_label="core")
        )
        user = User.objects.get(pk=user.pk)
        self.assertTrue(user_can(user, "manage_options"))

    def test_inactive_superuser_cannot(self):
        user = User.objects.create_superuser(username="root", password="pass12345", email="r@example.com")
        user.is_active = False
        self.assertFalse(user_can(user, "manage_options"))


@override_settings(ALLOWED_HOSTS=["testserver", "localhost"], SECURE_SSL_REDIRECT=False)
class ErrorViewTests(TestCase):
    def setUp(self) -> None:
        self.factory = RequestFactory()

    def test_403_plain_text(self):
        request = self.factory.get("/options/")
        response = error_403_view(request, PermissionDenied("Nope."))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.content.decode(), "Nope.")

    def test_403_json_for_ajax(self):
        request = self.factory.get("/options/", HTTP_X_REQUESTED_WITH="XMLHttpRequest")
        response = error_403_view(request, PermissionDenied("Nope."))
        self.assertEqual(response.status_code, 403)
        payload = json.loads(response.content)
        self.assertFalse(payload["ok"])
        self.assertEqual(payload["error"], "forbidden")

    def test_options_index_denied_for_anonymous(self):
        response = self.client.get("/options/")
        self.assertEqual(response.status_code, 403)

    def test_unknown_options_page_is_404(self):
        user = User.objects.create_superuser(username="root", password="pass12345", email="r@example.com")
        self.client.force_login(user)
        response = self.client.get("/options/does-not-exist/")
        self.assertEqual(response.status_code, 404)


class UninstallCommandTests(TestCase):
    def test_unknown_app(self):
        with self.assertRaises(CommandError):
            call_command("uninstall_plugin", "no_such_app")

    def test_app_without_handler(self):
        with self.assertRaises(CommandError):
            call_command("uninstall_plugin", "core")
