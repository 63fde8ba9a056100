"""Add-on management through the Universal Plugin Manager (UPM)."""

import os
import time
from typing import TYPE_CHECKING, Any

from stashclient.decoding import decode_body
from stashclient.exceptions import UnexpectedStatusError
from stashclient.logging import get_logger
from stashclient.types.addons import Addon, AddonVendor

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport

PLUGINS_PATH = "/rest/plugins/1.0"
PLUGIN_CONTENT_TYPE = "application/vnd.atl.plugins.plugin+json"
LICENSE_CONTENT_TYPE = "application/vnd.atl.plugins+json"

logger = get_logger("addons")


def _parse_addon(data: dict[str, Any]) -> Addon:
    vendor = data.get("vendor")
    return Addon(
        key=data["key"],
        name=data.get("name"),
        version=data.get("version"),
        enabled=data.get("enabled", False),
        enabled_by_default=data.get("enabledByDefault", False),
        user_installed=data.get("userInstalled", False),
        uses_licensing=data.get("usesLicensing", False),
        description=data.get("description"),
        vendor=AddonVendor(
            name=vendor.get("name"),
            link=vendor.get("link"),
            marketplace_link=vendor.get("marketplaceLink"),
        )
        if vendor
        else None,
        links=dict(data.get("links") or {}),
        raw=data,
    )


def _parse_task_status(data: dict[str, Any]) -> tuple[bool, str | None]:
    """Return (done, result link) of a pending UPM task."""
    if not data.get("done"):
        return False, None
    return True, data["links"]["result"]


def _addon_path(key: str) -> str:
    return f"{PLUGINS_PATH}/{key}-key"


class AddonsClient:
    """Client for add-on install, enable/disable and licensing."""

    def __init__(self, transport: "HTTPTransport", poll_interval: float = 0.1) -> None:
        """
        Initialize the add-ons client.

        Args:
            transport: HTTP transport for making requests
            poll_interval: Seconds between installation status checks
        """
        self.transport = transport
        self.poll_interval = poll_interval

    def get_upm_token(self) -> str:
        """Return the UPM token required by :meth:`install`."""
        request = self.transport.build_request("GET", f"{PLUGINS_PATH}/?os_authType=basic")
        response = self.transport.consume(request)
        response.raise_for_error()
        if response.status_code != 200:
            raise UnexpectedStatusError(response.status_code)
        return response.headers.get("upm-token", "")

    def get(self, key: str) -> Addon:
        """
        Get an installed add-on.

        Raises:
            APIError: With status 404 if the add-on is not installed
        """
        body = self.transport.request("GET", _addon_path(key), None, 200)
        return decode_body(_parse_addon, body)

    def install(self, upm_token: str, jar_path: str | os.PathLike) -> str:
        """
        Upload and install an add-on, waiting for UPM to finish.

        Args:
            upm_token: Token from :meth:`get_upm_token`
            jar_path: Path of the plugin archive

        Returns:
            Key of the installed add-on
        """
        with open(jar_path, "rb") as jar:
            request = self.transport.build_multipart_request(
                f"{PLUGINS_PATH}/?token={upm_token}",
                files={"plugin": (os.path.basename(jar_path), jar)},
                data={"url": ""},
            )
            body = self.transport.expect(request, 200, 202)

        task = decode_body(lambda data: data["links"]["alternate"], body)
        logger.info("Add-on upload accepted, waiting for task %s", task)
        return self._wait_installation(task)

    def _wait_installation(self, task: str) -> str:
        while True:
            body = self.transport.request("GET", task, None, 200)
            done, result = decode_body(_parse_task_status, body)
            if not done:
                time.sleep(self.poll_interval)
                continue

            body = self.transport.request("GET", result, None, 200)
            key = decode_body(lambda data: data["key"], body)
            logger.info("Add-on %s installed", key)
            return key

    def uninstall(self, key: str) -> None:
        """Uninstall an add-on; an add-on that is not installed is ignored."""
        request = self.transport.build_request("DELETE", _addon_path(key))
        response = self.transport.consume(request)
        if response.status_code in (204, 404):
            return
        response.raise_for_error()
        raise UnexpectedStatusError(response.status_code)

    def enable(self, addon: Addon) -> None:
        """Enable an installed add-on."""
        self._put_addon(addon, enabled=True)

    def disable(self, addon: Addon) -> None:
        """Disable an installed add-on."""
        self._put_addon(addon, enabled=False)

    def _put_addon(self, addon: Addon, enabled: bool) -> None:
        payload = dict(addon.raw or {"key": addon.key})
        payload["enabled"] = enabled
        request = self.transport.build_request(
            "PUT",
            _addon_path(addon.key),
            payload,
            content_type=PLUGIN_CONTENT_TYPE,
        )
        self.transport.expect(request, 200)
        addon.enabled = enabled

    def set_license(self, key: str, license_key: str) -> bool:
        """
        Install a license for an add-on unless it already has that license.

        Returns:
            True if the license was changed
        """
        path = f"{_addon_path(key)}/license"
        body = self.transport.request("GET", path, None, 200)
        current = decode_body(lambda data: data.get("rawLicense"), body)
        if current == license_key:
            logger.debug("Add-on %s already has the requested license", key)
            return False

        request = self.transport.build_request(
            "PUT",
            path,
            {"rawLicense": license_key},
            content_type=LICENSE_CONTENT_TYPE,
            accept=False,
        )
        self.transport.expect(request, 200)
        logger.info("License updated for add-on %s", key)
        return True
