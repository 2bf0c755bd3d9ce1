"""
apps.core.settings_api
======================

Registry for plugin options pages.

Plugins describe *what* to edit; the host renders the page, checks the
capability, sanitizes through the registered callback and persists the
result (see ``apps.core.views.options_page``).

    admin_init  → register_setting(), register_style()
    admin_menu  → add_options_page(), enqueue_style(),
                  add_settings_section(), add_settings_field()

Registration is idempotent: registering the same id again updates the
existing entry in place, so a page never loses its sections or fields
while another request re-runs the admin hooks.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from django import forms

from .options import OptionStore, options

logger = logging.getLogger(__name__)

# Capability → Django permission
CAPABILITY_PERMISSIONS: Dict[str, str] = {
    "manage_options": "core.manage_options",
}


def user_can(user: Any, capability: str) -> bool:
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    if not getattr(user, "is_active", False):
        return False
    permission = CAPABILITY_PERMISSIONS.get(capability, capability)
    return bool(user.has_perm(permission))


# =====================================================================
# REGISTRY ENTRIES
# =====================================================================
@dataclass
class SettingsGroup:
    name: str
    option_key: str
    sanitize_callback: Callable[[Any], Mapping[str, Any]]
    persist_callback: Optional[Callable[[OptionStore, Mapping[str, Any]], Any]] = None
    store: OptionStore = options

    def current(self) -> Mapping[str, Any]:
        """Stored value, passed through the sanitizer."""
        return self.sanitize_callback(self.store.get(self.option_key))

    def save(self, raw: Mapping[str, Any]) -> Mapping[str, Any]:
        value = self.sanitize_callback(raw)
        if self.persist_callback is not None:
            self.persist_callback(self.store, value)
        else:
            self.store.set(self.option_key, dict(value))
        return value


@dataclass
class SettingsField:
    id: str
    title: str
    form_field: forms.Field


@dataclass
class SettingsSection:
    id: str
    title: str
    description: str = ""
    fields: Dict[str, SettingsField] = field(default_factory=dict)


@dataclass
class OptionsPage:
    slug: str
    page_title: str
    menu_title: str
    capability: str
    option_group: str
    sections: Dict[str, SettingsSection] = field(default_factory=dict)
    style_handles: List[str] = field(default_factory=list)


# =====================================================================
# REGISTRY
# =====================================================================
class SettingsRegistry:
    def __init__(self) -> None:
        self._groups: Dict[str, SettingsGroup] = {}
        self._pages: Dict[str, OptionsPage] = {}
        self._styles: Dict[str, str] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # admin_init
    # ------------------------------------------------------------------
    def register_setting(
        self,
        group: str,
        option_key: str,
        sanitize_callback: Callable[[Any], Mapping[str, Any]],
        persist_callback: Optional[Callable[[OptionStore, Mapping[str, Any]], Any]] = None,
        store: Optional[OptionStore] = None,
    ) -> SettingsGroup:
        entry = SettingsGroup(
            name=group,
            option_key=option_key,
            sanitize_callback=sanitize_callback,
            persist_callback=persist_callback,
            store=store or options,
        )
        with self._lock:
            self._groups[group] = entry
        return entry

    def register_style(self, handle: str, path: str) -> None:
        """Register a static stylesheet; nothing is printed until enqueued."""
        with self._lock:
            self._styles[handle] = path

    # ------------------------------------------------------------------
    # admin_menu
    # ------------------------------------------------------------------
    def add_options_page(
        self,
        slug: str,
        page_title: str,
        menu_title: str,
        capability: str,
        option_group: Optional[str] = None,
    ) -> OptionsPage:
        with self._lock:
            page = self._pages.get(slug)
            if page is None:
                page = OptionsPage(
                    slug=slug,
                    page_title=page_title,
                    menu_title=menu_title,
                    capability=capability,
                    option_group=option_group or slug,
                )
                self._pages[slug] = page
            else:
                page.page_title = page_title
                page.menu_title = menu_title
                page.capability = capability
                page.option_group = option_group or slug
            return page

    def enqueue_style(self, page_slug: str, handle: str) -> None:
        with self._lock:
            page = self._require_page(page_slug)
            if handle not in page.style_handles:
                page.style_handles.append(handle)

    def add_settings_section(
        self, section_id: str, title: str, page_slug: str, description: str = ""
    ) -> SettingsSection:
        with self._lock:
            page = self._require_page(page_slug)
            section = page.sections.get(section_id)
            if section is None:
                section = SettingsSection(id=section_id, title=title, description=description)
                page.sections[section_id] = section
            else:
                section.title = title
                section.description = description
            return section

    def add_settings_field(
        self,
        field_id: str,
        title: str,
        page_slug: str,
        section_id: str,
        form_field: forms.Field,
    ) -> SettingsField:
        with self._lock:
            page = self._require_page(page_slug)
            try:
                section = page.sections[section_id]
            except KeyError:
                raise LookupError(f"Unknown settings section {section_id!r} on page {page_slug!r}")
            entry = SettingsField(id=field_id, title=title, form_field=form_field)
            section.fields[field_id] = entry
            return entry

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_group(self, name: str) -> Optional[SettingsGroup]:
        return self._groups.get(name)

    def get_page(self, slug: str) -> Optional[OptionsPage]:
        return self._pages.get(slug)

    def pages(self) -> List[OptionsPage]:
        return list(self._pages.values())

    def page_styles(self, page: OptionsPage) -> List[str]:
        paths = []
        for handle in page.style_handles:
            path = self._styles.get(handle)
            if path is None:
                logger.warning("Style %r enqueued on %s but never registered", handle, page.slug)
                continue
            paths.append(path)
        return paths

    def clear(self) -> None:
        with self._lock:
            self._groups.clear()
            self._pages.clear()
            self._styles.clear()

    def _require_page(self, slug: str) -> OptionsPage:
        page = self._pages.get(slug)
        if page is None:
            raise LookupError(f"Unknown options page {slug!r}")
        return page


registry = SettingsRegistry()


# =====================================================================
# FORM
# =====================================================================
class OptionsForm(forms.Form):
    """Form assembled from the sections registered on an options page."""

    def __init__(self, page: OptionsPage, *args, **kwargs):
        self.page = page
        super().__init__(*args, **kwargs)
        for section in list(page.sections.values()):
            for entry in list(section.fields.values()):
                form_field = copy.deepcopy(entry.form_field)
                form_field.label = entry.title
                self.fields[entry.id] = form_field

    def sections(self) -> Iterator[Tuple[SettingsSection, List[forms.BoundField]]]:
        for section in list(self.page.sections.values()):
            yield section, [self[field_id] for field_id in section.fields if field_id in self.fields]
