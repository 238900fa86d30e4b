"""Argument parsing functionality for range-resolver."""

import argparse

from constants import FailurePolicy


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Options left unset on the command line come back as None so values from
    a config file (-c) can fill them in.
    """
    parser = argparse.ArgumentParser(
        prog="range-resolver",
        description=(
            "Resolve a Maven version range to the highest matching version "
            "per build variant and optionally write it into a copy of the POM"
        ),
        add_help=True,
    )

    parser.add_argument("-g", "--group-id",
                        dest="GROUP_ID",
                        help="Group id of the artifact to resolve",
                        action="store", type=str)
    parser.add_argument("-a", "--artifact-id",
                        dest="ARTIFACT_ID",
                        help="Artifact id of the artifact to resolve",
                        action="store", type=str)
    parser.add_argument("-r", "--version-range",
                        dest="VERSION_RANGE",
                        help="Version range to resolve, e.g. \"[6.0.0-1, 6.0.1-1]\"",
                        action="store", type=str)
    parser.add_argument("--include-snapshots",
                        dest="INCLUDE_SNAPSHOTS",
                        help="Include SNAPSHOT and timestamped snapshot versions.",
                        action="store_true", default=None)
    parser.add_argument("-t", "--target",
                        dest="TARGETS",
                        help="Resolution target to compute (repeatable). Defaults to ce-kafka and ccs-kafka.",
                        action="append", type=str)
    parser.add_argument("-p", "--print",
                        dest="PRINT_TARGETS",
                        help="Print the highest version of TARGET to stdout (repeatable). Use with --quiet.",
                        action="append", type=str)
    parser.add_argument("--property",
                        dest="PROPERTIES",
                        help="Record TARGET's version under a property, TARGET=NAME (repeatable)",
                        action="append", type=str)
    parser.add_argument("--pom-file",
                        dest="POM_FILE",
                        help="POM to read when writing a new POM (default: pom.xml)",
                        action="store", type=str)
    parser.add_argument("--new-pom-file",
                        dest="NEW_POM_FILE",
                        help="Name of the POM to create next to --pom-file with resolved properties set",
                        action="store", type=str)
    parser.add_argument("--repository",
                        dest="REPOSITORIES",
                        help="Maven repository base URL (repeatable). Defaults to Maven Central.",
                        action="append", type=str)
    parser.add_argument("--fail-on",
                        dest="FAIL_ON",
                        help="Fail when any target or only when all targets are unresolved (default: any)",
                        action="store", type=str.lower,
                        choices=[p.value for p in FailurePolicy])
    parser.add_argument("--parallel",
                        dest="PARALLEL",
                        help="Evaluate targets concurrently.",
                        action="store_true", default=None)
    parser.add_argument("--skip",
                        dest="SKIP",
                        help="Do nothing and exit successfully.",
                        action="store_true", default=None)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to JSON file receiving per-target results",
                        action="store", type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store", type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store", type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors; printed versions still go to stdout.",
                        action="store_true")

    return parser.parse_args(argv)
