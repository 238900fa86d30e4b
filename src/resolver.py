"""range-resolver - resolve a Maven version range per build variant.

Resolves a version range to the highest matching version for each named
target (by default the ce-kafka and ccs-kafka build lines). Snapshots are
excluded unless asked for. Resolved versions can be printed, exported as
JSON, and written into a copy of the project's POM with every other byte
left as it was.

Example:

    range-resolver -g org.apache.kafka -a kafka-clients \\
        -r "[6.0.0-1, 6.0.1-1]" -p ce-kafka -q

Returns:
    int: Exit code (see constants.ExitCodes)
"""
import json
import logging
import sys
from typing import Dict, List, Mapping, Optional

from constants import ExitCodes, FailurePolicy
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from errors import (
    ConfigError,
    DocumentParseError,
    DocumentWriteFailure,
    InvalidVersionRange,
    PropertyNotFound,
    RepositoryError,
    UnknownTarget,
)
from args import parse_args
from cli_config import ResolverConfig, build_config, load_config_file
from pom import patch_document, read_document, write_document
from registry.maven.client import MavenRepositoryClient
from versioning.models import Failed, PropertyEdit, RangeConstraint, ResolutionOutcome, Selected, TargetSpec
from versioning.service import ResolutionService, build_targets

logger = logging.getLogger(__name__)


def setup_logging(args) -> Optional[logging.Handler]:
    """Configure logging from --loglevel, --quiet and --logfile.

    Returns the --logfile handler, if any, so the caller can close it.
    """
    level = getattr(args, "LOG_LEVEL", None)
    if getattr(args, "QUIET", False) and not level:
        level = "ERROR"
    configure_logging(level)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)
        return file_handler
    return None


def is_unresolved(outcomes: Mapping[str, ResolutionOutcome], policy: FailurePolicy) -> bool:
    """Apply the caller's failure policy to a set of outcomes."""
    failed = [o for o in outcomes.values() if not o.ok]
    if policy == FailurePolicy.ALL:
        return bool(outcomes) and len(failed) == len(outcomes)
    return bool(failed)


def resolved_properties(outcomes: Mapping[str, ResolutionOutcome], targets: List[TargetSpec]) -> Dict[str, str]:
    """Map property name -> version for every resolved target that has a property."""
    properties = {}
    for target in targets:
        outcome = outcomes.get(target.name)
        if target.property_name and isinstance(outcome, Selected):
            logger.info("Setting %s property %s=%s", target.name, target.property_name, outcome.version)
            properties[target.property_name] = outcome.version.raw
    return properties


def export_json(constraint: RangeConstraint, config: ResolverConfig, targets: List[TargetSpec],
                outcomes: Mapping[str, ResolutionOutcome], path: str) -> None:
    """Exports the per-target results to a JSON file.

    Args:
        constraint: The resolved constraint.
        config: Invocation configuration.
        targets: Targets in resolution order.
        outcomes: Outcome per target name.
        path: File path to export the JSON.
    """
    data = {
        "groupId": constraint.group_id,
        "artifactId": constraint.artifact_id,
        "versionRange": constraint.expression,
        "includeSnapshots": config.include_snapshots,
        "targets": [],
    }
    for target in targets:
        outcome = outcomes[target.name]
        data["targets"].append({
            "name": target.name,
            "variant": target.variant_suffix,
            "property": target.property_name,
            "resolvedVersion": outcome.version.raw if isinstance(outcome, Selected) else None,
            "error": outcome.reason if isinstance(outcome, Failed) else None,
            "failureKind": outcome.kind.value if isinstance(outcome, Failed) else None,
        })
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logger.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        raise


def create_installed_pom(config: ResolverConfig, properties: Mapping[str, str]) -> str:
    """Read the current POM, set ``properties`` and write the new POM.

    Returns:
        str: Path of the written POM.

    Raises:
        OSError: when the source POM cannot be read.
        UnicodeError: when its bytes do not match its encoding.
        DocumentParseError, PropertyNotFound, DocumentWriteFailure.
    """
    logger.info("Creating installed pom file")
    text, encoding = read_document(config.pom_file)
    edits = [PropertyEdit(name, value) for name, value in properties.items()]
    patched = patch_document(text, edits)
    path = config.new_pom_path
    write_document(path, patched, encoding)
    return path


def run(config: ResolverConfig) -> ExitCodes:
    """Resolve, report and persist according to ``config``."""
    if config.skip:
        logger.info("Skipping range resolution")
        return ExitCodes.SUCCESS

    try:
        targets = build_targets(config.targets, config.property_names, config.variants)
    except UnknownTarget as e:
        logger.error("%s", e)
        return ExitCodes.CONFIG_ERROR

    constraint = RangeConstraint(config.group_id, config.artifact_id, config.version_range)
    service = ResolutionService(MavenRepositoryClient(config.repositories),
                                known_variants=config.variants.values())
    try:
        outcomes = service.resolve(constraint, targets, config.include_snapshots, parallel=config.parallel)
    except InvalidVersionRange as e:
        logger.error("%s", e)
        return ExitCodes.CONFIG_ERROR
    except RepositoryError as e:
        logger.error("Repository connection error: %s", e)
        return ExitCodes.CONNECTION_ERROR

    if is_debug_enabled(logger):
        logger.debug(
            "Resolution finished",
            extra=extra_context(
                event="decision",
                component="cli",
                action="resolve",
                target=str(constraint),
                outcome=",".join(f"{k}={'ok' if v.ok else 'failed'}" for k, v in outcomes.items()),
            )
        )

    for outcome in outcomes.values():
        if isinstance(outcome, Failed):
            logger.error("%s", outcome.reason)

    for name in config.targets:
        outcome = outcomes[name]
        if name in config.print_targets and isinstance(outcome, Selected):
            print(outcome.version)

    if config.output:
        try:
            export_json(constraint, config, targets, outcomes, config.output)
        except OSError:
            return ExitCodes.FILE_ERROR

    if is_unresolved(outcomes, config.fail_on):
        failed = [name for name, outcome in outcomes.items() if not outcome.ok]
        logger.error("Unresolved targets %s for constraint %s (policy: %s)", ", ".join(failed),
                     constraint, config.fail_on.value)
        return ExitCodes.UNRESOLVED

    properties = resolved_properties(outcomes, targets)

    if config.new_pom_file:
        try:
            create_installed_pom(config, properties)
        except PropertyNotFound as e:
            logger.error("%s", e)
            return ExitCodes.FILE_ERROR
        except (DocumentParseError, DocumentWriteFailure) as e:
            logger.error("Failed to write installed pom file: %s", e)
            return ExitCodes.FILE_ERROR
        except UnicodeError as e:
            logger.error("Character encoding error in %s: %s", config.pom_file, e)
            return ExitCodes.FILE_ERROR
        except OSError as e:
            logger.error("Couldn't read %s: %s", config.pom_file, e)
            return ExitCodes.FILE_ERROR

    return ExitCodes.SUCCESS


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    file_handler = setup_logging(args)

    try:
        try:
            config = build_config(args, load_config_file(getattr(args, "CONFIG", None)))
        except ConfigError as e:
            logger.error("%s", e)
            exit_code = ExitCodes.CONFIG_ERROR
        else:
            exit_code = run(config)
    finally:
        if file_handler is not None:
            logging.getLogger().removeHandler(file_handler)
            file_handler.close()

    sys.exit(exit_code.value)


if __name__ == "__main__":
    main()
