"""Maven repository client: lists the versions an artifact has been published under."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from constants import Constants
from common import http_client
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url
from errors import RepositoryError
from versioning.models import RangeConstraint
from versioning.ranges import parse_constraint


logger = logging.getLogger(__name__)


def metadata_url(repository: str, group_id: str, artifact_id: str) -> str:
    """Return the maven-metadata.xml URL of an artifact in ``repository``."""
    base = repository.rstrip("/")
    return f"{base}/{group_id.replace('.', '/')}/{artifact_id}/{Constants.MAVEN_METADATA_FILE}"


def parse_metadata_versions(text: str) -> List[str]:
    """Extract versioning/versions/version entries from maven-metadata.xml."""
    root = ET.fromstring(text)
    versions = []
    versioning = root.find("versioning")
    if versioning is not None:
        versions_elem = versioning.find("versions")
        if versions_elem is not None:
            for version_elem in versions_elem.findall("version"):
                ver_text = version_elem.text
                if ver_text and ver_text.strip():
                    versions.append(ver_text.strip())
    return versions


class MavenRepositoryClient:
    """Fetches version lists from one or more Maven repositories.

    Versions from every repository are merged in first-seen order. The
    client keeps no state between calls.
    """

    def __init__(self, repositories: Optional[Iterable[str]] = None):
        self.repositories = list(repositories or [Constants.REPOSITORY_URL_MAVEN_CENTRAL])

    def fetch_versions(self, group_id: str, artifact_id: str) -> List[str]:
        """Return all published versions of ``group_id:artifact_id``.

        Raises:
            RepositoryError: when no repository answered, either unreachable
                or still failing with a server error after retries.
        """
        versions: List[str] = []
        seen = set()
        reached = 0
        failures = []

        for repository in self.repositories:
            url = metadata_url(repository, group_id, artifact_id)
            with Timer() as timer:
                status_code, _, text = http_client.robust_get(url)

            if status_code == 0 or status_code >= 500:
                detail = text if status_code == 0 else f"HTTP {status_code}"
                failures.append(f"{safe_url(url)}: {detail}")
                logger.warning(
                    "Repository unreachable",
                    extra=extra_context(
                        event="http_error",
                        outcome="exception" if status_code == 0 else "server_error",
                        status_code=status_code or None,
                        target=safe_url(url),
                        duration_ms=timer.duration_ms(),
                    )
                )
                continue

            reached += 1
            if status_code != 200 or not text:
                logger.info("No metadata for %s:%s in %s (HTTP %s)", group_id, artifact_id,
                            safe_url(repository), status_code)
                continue

            try:
                found = parse_metadata_versions(text)
            except ET.ParseError as e:
                logger.warning("Unparseable metadata at %s: %s", safe_url(url), e)
                continue

            if is_debug_enabled(logger):
                logger.debug(
                    "Metadata parsed",
                    extra=extra_context(
                        event="parse",
                        component="maven_client",
                        action="fetch_versions",
                        outcome="success",
                        target=safe_url(url),
                        count=len(found),
                    )
                )
            for v in found:
                if v not in seen:
                    seen.add(v)
                    versions.append(v)

        if reached == 0 and failures:
            raise RepositoryError("; ".join(failures))
        return versions

    def resolve_version_range(self, constraint: RangeConstraint) -> List[str]:
        """Return the published versions matched by ``constraint``.

        A plain version (no brackets) is returned as-is without contacting
        any repository.

        Raises:
            InvalidVersionRange: when the expression cannot be parsed.
            RepositoryError: when no repository could be reached.
        """
        parsed = parse_constraint(constraint.expression)
        if not parsed.is_range:
            return [constraint.expression.strip()]
        available = self.fetch_versions(constraint.group_id, constraint.artifact_id)
        return parsed.filter(available)
