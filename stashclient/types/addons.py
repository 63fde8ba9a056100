"""Add-on (plugin) data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AddonVendor:
    """Vendor of an add-on."""

    name: str | None
    link: str | None = None
    marketplace_link: str | None = None


@dataclass
class Addon:
    """Installed add-on as reported by the Universal Plugin Manager.

    ``raw`` keeps the full server representation because enabling and
    disabling send it back with only the ``enabled`` flag changed.
    """

    key: str
    name: str | None
    version: str | None
    enabled: bool
    enabled_by_default: bool
    user_installed: bool
    uses_licensing: bool
    description: str | None = None
    vendor: AddonVendor | None = None
    links: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)
