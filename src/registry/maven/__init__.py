"""Maven registry package.

- client.py: maven-metadata.xml lookups across one or more repositories
"""

from .client import MavenRepositoryClient, metadata_url, parse_metadata_versions  # noqa: F401
