"""Command line entry point: write Protocol declarations for thing schemas."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .core.errors import UnsupportedContractError
from .schema.model import load_thing_schemas
from .schema.writer import write_thing_schemas, write_thing_schemas_to_file
from .storage.settings import SettingsManager

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="device-access",
        description="Write Python Protocol declarations for thing schemas.",
    )
    parser.add_argument("schema", help="JSON file holding one schema or a list of schemas")
    parser.add_argument("-o", "--output", help="declaration file to write (default: stdout)")
    parser.add_argument("--log-level", help="logging level (default: from settings)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the declaration writer.

    Returns:
        Process exit status
    """
    args = _parse_args(argv)
    settings = SettingsManager().load()
    _setup_logging(args.log_level or settings.log_level)

    try:
        schemas = load_thing_schemas(args.schema)
        if args.output:
            write_thing_schemas_to_file(
                schemas,
                args.output,
                header=settings.declaration_header,
                indent=settings.indent,
            )
        else:
            sys.stdout.write(
                write_thing_schemas(
                    schemas, header=settings.declaration_header, indent=settings.indent
                )
            )
    except UnsupportedContractError as e:
        logger.error(f"Unsupported contract: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Failed to write declarations: {e}")
        return 1

    return 0
