"""
Release update checker.

Sandi Metz Principles:
- Single Responsibility: Decide whether a newer release exists
- Dependency Injection: HTTP client injected
- Small methods: Fetching, parsing and version comparison separated
"""

import asyncio
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pray.config import PrayConfig
from pray.exceptions import PrayError, ResponseParseError
from pray.http.client import HTTPClientConfig, RetryingHTTPClient
from pray.http.deadline import Deadline
from pray.utils.logger import get_logger

logger = get_logger(__name__)

GITHUB_RELEASES_URL = "https://api.github.com/repos/anashaat/pray-cli/releases/latest"
DEFAULT_CHECK_TIMEOUT = 5.0
MAX_RELEASE_NOTES = 500


class ReleaseInfo(BaseModel):
    """Latest release as reported by GitHub."""

    tag_name: str = ""
    name: str = ""
    body: str = ""
    html_url: str = ""
    published_at: Optional[datetime] = None
    prerelease: bool = False
    draft: bool = False


class UpdateCheckResult(BaseModel):
    """Outcome of an update check."""

    update_available: bool = False
    current_version: str
    latest_version: str = ""
    release_url: str = ""
    release_notes: str = ""
    published_at: Optional[datetime] = None

    def format_message(self) -> str:
        """Build a notification, or "" when no update is available."""
        if not self.update_available:
            return ""
        return (
            f"A new version of pray is available: "
            f"{self.current_version} -> {self.latest_version}\n"
            f"Visit: {self.release_url}"
        )


class UpdateChecker:
    """
    Check for a newer release.

    Designed to run in the background while a command executes; a
    check that misses its deadline is dropped silently.
    """

    def __init__(
        self,
        current_version: str,
        http_client: RetryingHTTPClient | None = None,
        url: str = GITHUB_RELEASES_URL,
        timeout: float = DEFAULT_CHECK_TIMEOUT,
    ):
        """
        Initialize checker.

        Args:
            current_version: Version of the running client
            http_client: HTTP client (single attempt, built if None)
            url: Latest-release endpoint
            timeout: Default deadline for background checks
        """
        self._current_version = current_version
        self._http = http_client or RetryingHTTPClient(
            HTTPClientConfig(
                timeout=timeout,
                max_retries=0,
                user_agent=f"pray-cli/{current_version}",
            )
        )
        self._url = url
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        """Get default deadline for background checks."""
        return self._timeout

    async def check(self, deadline: Optional[Deadline] = None) -> UpdateCheckResult:
        """
        Fetch the latest release and compare versions.

        Args:
            deadline: Cancellation signal

        Returns:
            Check result (never an update for pre-releases or drafts)

        Raises:
            PrayError: If the release cannot be fetched or parsed
        """
        body = await self._http.get(
            self._url,
            headers={"Accept": "application/vnd.github.v3+json"},
            deadline=deadline,
        )
        release = self._parse(body)

        if release.prerelease or release.draft:
            return UpdateCheckResult(current_version=self._current_version)

        return UpdateCheckResult(
            update_available=is_newer_version(
                normalize_version(self._current_version),
                normalize_version(release.tag_name),
            ),
            current_version=self._current_version,
            latest_version=release.tag_name,
            release_url=release.html_url,
            release_notes=truncate(release.body, MAX_RELEASE_NOTES),
            published_at=release.published_at,
        )

    def start_background(
        self, deadline: Optional[Deadline] = None
    ) -> "asyncio.Task[Optional[UpdateCheckResult]]":
        """
        Start a check that resolves to None if it misses its deadline.

        Args:
            deadline: Deadline for the check (timeout from now if None)

        Returns:
            Running task
        """
        deadline = deadline or Deadline.after(self._timeout)
        return asyncio.create_task(self._check_quietly(deadline))

    async def collect(
        self, task: "asyncio.Task[Optional[UpdateCheckResult]]"
    ) -> Optional[UpdateCheckResult]:
        """
        Wait for a background check.

        Args:
            task: Task from start_background()

        Returns:
            Result, or None if the check failed, timed out or was cancelled
        """
        try:
            return await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
            return None

    async def _check_quietly(self, deadline: Deadline) -> Optional[UpdateCheckResult]:
        """Run check() within deadline, mapping every failure to None."""
        try:
            return await asyncio.wait_for(
                self.check(deadline), timeout=deadline.remaining()
            )
        except asyncio.TimeoutError:
            logger.debug("Update check timed out")
        except PrayError as e:
            logger.debug("Update check failed", error=str(e))
        return None

    @staticmethod
    def _parse(body: bytes) -> ReleaseInfo:
        try:
            return ReleaseInfo.model_validate_json(body)
        except PydanticValidationError as e:
            raise ResponseParseError(f"failed to parse release info: {e}") from e


def create_update_checker(
    config: PrayConfig, http_client: RetryingHTTPClient | None = None
) -> Optional[UpdateChecker]:
    """
    Build an update checker, or None when checks are disabled.

    Args:
        config: Core configuration
        http_client: HTTP client to use (single attempt, built if None)

    Returns:
        Update checker or None
    """
    if not config.update_check_enabled:
        return None
    return UpdateChecker(
        config.version, http_client=http_client, timeout=config.update_check_timeout
    )


def normalize_version(version: str) -> str:
    """Strip whitespace and a leading "v"."""
    version = version.strip()
    return version[1:] if version.startswith("v") else version


def parse_version(version: str) -> List[int]:
    """
    Parse "1.2.3" (any "-suffix" ignored) into numeric parts.

    Non-numeric parts count as 0.
    """
    core = version.split("-", 1)[0]
    parts = []
    for part in core.split("."):
        digits = ""
        for char in part:
            if not char.isdigit():
                break
            digits += char
        parts.append(int(digits) if digits else 0)
    return parts


def is_newer_version(current: str, latest: str) -> bool:
    """
    Compare the first three version components.

    Args:
        current: Normalized running version ("dev" never updates)
        latest: Normalized latest version

    Returns:
        True if latest is strictly newer
    """
    if current in ("", "dev"):
        return False

    current_parts = _pad(parse_version(current))
    latest_parts = _pad(parse_version(latest))
    return latest_parts > current_parts


def truncate(text: str, max_length: int) -> str:
    """Cut text to max_length characters, ending with "..." when cut."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _pad(parts: List[int]) -> List[int]:
    return (parts + [0, 0, 0])[:3]
