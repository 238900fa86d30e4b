"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    UNRESOLVED = 3
    CONFIG_ERROR = 4


class FailurePolicy(Enum):
    """When unresolved targets should fail the invocation.

    Args:
        Enum (string): Failure policy names accepted on the CLI.
    """

    ANY = "any"
    ALL = "all"


class Variants(Enum):
    """Known build variants and the version suffix that identifies them.

    Args:
        Enum (string): Trailing qualifier of versions belonging to the variant.
    """

    CE = "-ce"
    CCS = "-ccs"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REPOSITORY_URL_MAVEN_CENTRAL = "https://repo1.maven.org/maven2"
    MAVEN_METADATA_FILE = "maven-metadata.xml"
    POM_XML_FILE = "pom.xml"

    SNAPSHOT = "SNAPSHOT"
    SNAPSHOT_TIMESTAMP = r"^(.*-)?([0-9]{8}\.[0-9]{6}-[0-9]+)$"

    # Target name -> variant suffix. None means no variant restriction.
    TARGET_VARIANTS = {
        "ce-kafka": Variants.CE.value,
        "ccs-kafka": Variants.CCS.value,
        "any": None,
    }
    DEFAULT_TARGETS = ["ce-kafka", "ccs-kafka"]
    DEFAULT_PROPERTY_NAMES = {
        "ce-kafka": "ce.kafka.version",
        "ccs-kafka": "kafka.version",
    }

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "RANGE_RESOLVER_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    DEFAULT_ENCODING = "UTF-8"
