from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.contrib.messages.storage.cookie import CookieStorage
from django.core.cache import cache
from django.core.management import call_command
from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from apps.core import views
from apps.core.options import OptionStore, options
from apps.core.settings_api import registry

from apps.verify_meta_tags import hooks
from apps.verify_meta_tags.head import render_head
from apps.verify_meta_tags.services import (
    DEFAULTS,
    OPTION_KEY,
    FieldPolicy,
    VerificationSettings,
    load,
    persist,
    sanitize,
    uninstall,
)

User = get_user_model()

OPTIONS_URL = "/options/vmt-options-page/"


class SanitizeTests(SimpleTestCase):
    def test_missing_keys_are_defaulted(self):
        for raw in [None, {}, {"google": "G"}, {"pinterest": "P"}, {"analytics": "A"}]:
            result = sanitize(raw).as_dict()
            self.assertEqual(set(result), set(DEFAULTS))
            self.assertTrue(all(isinstance(v, str) for v in result.values()))

    def test_malformed_record_degrades_to_defaults(self):
        self.assertEqual(sanitize("garbage"), VerificationSettings())
        self.assertEqual(sanitize(["google"]), VerificationSettings())
        self.assertEqual(
            sanitize({"google": 123, "pinterest": None, "analytics": ["x"]}),
            VerificationSettings(),
        )

    def test_text_fields_lose_markup(self):
        result = sanitize({"google": "<b>XYZ</b>", "pinterest": "<i>abc</i>"})
        self.assertEqual(result.google, "XYZ")
        self.assertEqual(result.pinterest, "abc")

    def test_text_fields_are_idempotent(self):
        for value in ["<b>XYZ</b>", "<script>x()</script>abc", "&lt;b&gt;t", "plain"]:
            once = sanitize({"google": value})
            twice = sanitize(once.as_dict())
            self.assertEqual(once, twice)
            self.assertNotIn("<", once.google)

    def test_analytics_keeps_markup(self):
        snippet = '<script async src="https://example.com/a.js"></script>\n<script>track()</script>'
        self.assertEqual(sanitize({"analytics": snippet}).analytics, snippet)

    def test_analytics_drops_escaped_quotes(self):
        raw = '<script src=\\"https://example.com/a.js\\"></script>'
        self.assertEqual(
            sanitize({"analytics": raw}).analytics,
            '<script src="https://example.com/a.js"></script>',
        )

    def test_policies_cover_every_field(self):
        self.assertEqual(set(FieldPolicy), {FieldPolicy.PLAIN_TEXT, FieldPolicy.TRUSTED_HTML})
        self.assertEqual(FieldPolicy.PLAIN_TEXT.sanitizer("<b>x</b>"), "x")
        self.assertEqual(FieldPolicy.TRUSTED_HTML.sanitizer("<b>x</b>"), "<b>x</b>")


class HeadTests(SimpleTestCase):
    def test_google_only(self):
        html = render_head(sanitize({"google": "ABC123", "pinterest": "", "analytics": ""}))
        self.assertEqual(html, '<meta name="google-site-verification" content="ABC123" />')

    def test_analytics_only(self):
        html = render_head(sanitize({"analytics": "<script>track()</script>"}))
        self.assertEqual(html, "<script>track()</script>")

    def test_nothing_when_empty(self):
        self.assertEqual(render_head(VerificationSettings()), "")

    def test_fixed_order(self):
        html = render_head(VerificationSettings(google="G", pinterest="P", analytics="<!-- A -->"))
        self.assertEqual(
            html.split("\n"),
            [
                '<meta name="google-site-verification" content="G" />',
                '<meta name="p:domain_verify" content="P" />',
                "<!-- A -->",
            ],
        )

    def test_meta_values_are_escaped(self):
        html = render_head(VerificationSettings(pinterest='a"b'))
        self.assertEqual(html, '<meta name="p:domain_verify" content="a&quot;b" />')


class PersistenceTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.store = OptionStore()

    def test_load_without_record(self):
        self.assertEqual(load(self.store), VerificationSettings())

    def test_persist_then_load(self):
        persist(self.store, {"google": "<b>XYZ</b>", "pinterest": "P1"})
        self.assertEqual(
            self.store.get(OPTION_KEY),
            {"google": "XYZ", "pinterest": "P1", "analytics": ""},
        )
        self.assertEqual(load(self.store), VerificationSettings(google="XYZ", pinterest="P1"))

    def test_load_heals_stored_junk(self):
        self.store.set(OPTION_KEY, {"google": "<em>G</em>", "extra": "ignored"})
        self.assertEqual(load(self.store), VerificationSettings(google="G"))

    def test_persist_sanitizes_settings_instances(self):
        saved = persist(self.store, VerificationSettings(google="<b>x</b>", analytics='<i class=\\"a\\">t</i>'))
        self.assertEqual(saved, VerificationSettings(google="x", analytics='<i class="a">t</i>'))
        self.assertEqual(self.store.get(OPTION_KEY), saved.as_dict())

    def test_uninstall_resets_to_defaults(self):
        persist(self.store, VerificationSettings(google="G"))
        uninstall(self.store)
        self.assertIsNone(self.store.get(OPTION_KEY))
        self.assertEqual(load(self.store), VerificationSettings())

    def test_uninstall_command(self):
        persist(options, VerificationSettings(google="G"))
        call_command("uninstall_plugin", "verify_meta_tags")
        self.assertEqual(load(options), VerificationSettings())


class HookReceiverTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.factory = RequestFactory()

    def test_on_init_loads_settings_for_request(self):
        persist(options, VerificationSettings(google="G"))
        request = self.factory.get("/")
        hooks.on_init(sender=None, request=request)
        self.assertEqual(getattr(request, hooks.REQUEST_ATTR), VerificationSettings(google="G"))

    def test_on_head_render_uses_request_state(self):
        request = self.factory.get("/")
        setattr(request, hooks.REQUEST_ATTR, VerificationSettings(pinterest="P"))
        self.assertEqual(
            hooks.on_head_render(sender=None, request=request),
            '<meta name="p:domain_verify" content="P" />',
        )

    def test_on_head_render_falls_back_to_store(self):
        persist(options, VerificationSettings(analytics="<script>track()</script>"))
        self.assertEqual(hooks.on_head_render(sender=None, request=None), "<script>track()</script>")

    def test_on_uninstall_ignores_other_apps(self):
        persist(options, VerificationSettings(google="G"))
        self.assertFalse(hooks.on_uninstall(sender="core", store=options))
        self.assertEqual(load(options).google, "G")
        self.assertTrue(hooks.on_uninstall(sender="verify_meta_tags", store=options))
        self.assertEqual(load(options), VerificationSettings())

    def test_admin_hooks_register_page(self):
        hooks.on_admin_init(sender=None)
        hooks.on_admin_menu(sender=None)
        page = registry.get_page(hooks.OPTIONS_PAGE)
        self.assertEqual(page.capability, "manage_options")
        self.assertEqual(
            [s.title for s in page.sections.values()],
            ["Owner Verification Meta Tags", "Site Statistics Tracking"],
        )
        self.assertEqual(list(page.sections[hooks.ID_SECTION].fields), ["google", "pinterest"])
        self.assertEqual(list(page.sections[hooks.ANALYTICS_SECTION].fields), ["analytics"])
        self.assertEqual(registry.get_group(hooks.OPTIONS_PAGE).option_key, OPTION_KEY)
        self.assertEqual(registry.page_styles(page), [hooks.STYLE_PATH])


@override_settings(ALLOWED_HOSTS=["testserver", "localhost"], SECURE_SSL_REDIRECT=False)
class PageHeadTests(TestCase):
    def setUp(self) -> None:
        cache.clear()

    def test_home_contains_google_tag_only(self):
        persist(options, {"google": "ABC123", "pinterest": "", "analytics": ""})
        response = self.client.get(reverse("home"))
        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('<meta name="google-site-verification" content="ABC123" />', content)
        self.assertNotIn("p:domain_verify", content)

    def test_home_contains_raw_analytics(self):
        persist(options, {"analytics": "<script>track()</script>"})
        content = self.client.get(reverse("home")).content.decode()
        self.assertIn("<script>track()</script>", content)
        self.assertNotIn("google-site-verification", content)

    def test_home_without_settings_has_no_tags(self):
        content = self.client.get(reverse("home")).content.decode()
        self.assertNotIn("google-site-verification", content)
        self.assertNotIn("p:domain_verify", content)


@override_settings(ALLOWED_HOSTS=["testserver", "localhost"], SECURE_SSL_REDIRECT=False)
class OptionsPageTests(TestCase):
    def setUp(self) -> None:
        cache.clear()
        self.admin = User.objects.create_superuser(
            username="admin", password="pass12345", email="admin@example.com"
        )

    def test_non_privileged_user_is_rejected(self):
        user = User.objects.create_user(username="u", password="pass12345")
        self.client.force_login(user)
        response = self.client.get(OPTIONS_URL)
        self.assertEqual(response.status_code, 403)
        content = response.content.decode()
        self.assertIn("You do not have sufficient permissions to access this page.", content)
        self.assertNotIn("Owner Verification Meta Tags", content)
        self.assertNotIn("<form", content)

    def test_anonymous_is_rejected(self):
        response = self.client.get(OPTIONS_URL)
        self.assertEqual(response.status_code, 403)

    def test_post_by_non_privileged_user_does_not_persist(self):
        user = User.objects.create_user(username="u", password="pass12345")
        self.client.force_login(user)
        response = self.client.post(OPTIONS_URL, {"verify-meta-tags-google": "X"})
        self.assertEqual(response.status_code, 403)
        self.assertIsNone(options.get(OPTION_KEY))

    def test_permission_holder_can_open_page(self):
        user = User.objects.create_user(username="editor", password="pass12345")
        user.user_permissions.add(
            Permission.objects.get(codename="manage_options", content_type__app_label="core")
        )
        self.client.force_login(user)
        self.assertEqual(self.client.get(OPTIONS_URL).status_code, 200)

    def test_page_renders_sections_and_stylesheet(self):
        self.client.force_login(self.admin)
        response = self.client.get(OPTIONS_URL)
        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn("Verify Meta Tags Plugin Options", content)
        self.assertIn("Owner Verification Meta Tags", content)
        self.assertIn("Site Statistics Tracking", content)
        self.assertIn("verify_meta_tags/admin.css", content)
        self.assertIn('class="verify-id"', content)
        self.assertIn("<textarea", content)

    def test_stored_values_are_escaped_in_form(self):
        persist(options, {"pinterest": 'a"b', "analytics": '<script>alert("x")</script>'})
        self.client.force_login(self.admin)
        content = self.client.get(OPTIONS_URL).content.decode()
        self.assertIn("a&quot;b", content)
        self.assertIn("&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;", content)
        self.assertNotIn('<script>alert("x")</script>', content)

    def test_submit_sanitizes_and_persists(self):
        self.client.force_login(self.admin)
        response = self.client.post(
            OPTIONS_URL,
            {
                "verify-meta-tags-google": "<b>XYZ</b>",
                "verify-meta-tags-pinterest": "",
                "verify-meta-tags-analytics": "<script>track()</script>",
            },
        )
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response["Location"], f"{OPTIONS_URL}?settings-updated=true")
        self.assertEqual(
            options.get(OPTION_KEY),
            {"google": "XYZ", "pinterest": "", "analytics": "<script>track()</script>"},
        )

    def test_submit_then_page_head(self):
        self.client.force_login(self.admin)
        self.client.post(OPTIONS_URL, {"verify-meta-tags-pinterest": "PIN42"})
        content = self.client.get(reverse("home")).content.decode()
        self.assertIn('<meta name="p:domain_verify" content="PIN42" />', content)

    def test_options_index_lists_page(self):
        self.client.force_login(self.admin)
        self.client.get(OPTIONS_URL)
        response = self.client.get(reverse("core:options_index"))
        self.assertEqual(response.status_code, 200)
        self.assertIn(OPTIONS_URL, response.content.decode())

    def test_submit_while_page_is_reregistered(self):
        persist(options, {"google": "G", "pinterest": "P", "analytics": "<script>a()</script>"})
        hooks.on_admin_init(sender=None)
        hooks.on_admin_menu(sender=None)
        # Another request re-running admin_menu has only reached its first step.
        registry.add_options_page(
            hooks.OPTIONS_PAGE,
            page_title="Verify Meta Tags Plugin Options",
            menu_title="Verify Meta Tags",
            capability="manage_options",
        )
        request = RequestFactory().post(
            OPTIONS_URL,
            {
                "verify-meta-tags-google": "G",
                "verify-meta-tags-pinterest": "NEW",
                "verify-meta-tags-analytics": "<script>a()</script>",
            },
        )
        request.user = self.admin
        request._messages = CookieStorage(request)
        response = views.options_page(request, hooks.OPTIONS_PAGE)
        self.assertEqual(response.status_code, 302)
        self.assertEqual(
            options.get(OPTION_KEY),
            {"google": "G", "pinterest": "NEW", "analytics": "<script>a()</script>"},
        )
