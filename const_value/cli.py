#!/usr/bin/env python3
"""
Command-line interface for decoding JSON files against a type.
"""

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Union

from .codec import Decoder
from .exceptions import UnsupportedTypeError
from .schema import json_schema_for
from .version import __version__

logger = logging.getLogger("const_value")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Decode a JSON file against a Python type and report every mismatch."
    )
    parser.add_argument(
        "data_file",
        type=str,
        help="Path to the JSON data file to decode"
    )
    parser.add_argument(
        "type",
        type=str,
        help="Type to decode into, as package.module:QualName"
    )
    parser.add_argument(
        "--deny-unknown-fields",
        action="store_true",
        help="Treat object keys with no matching record field as errors"
    )
    parser.add_argument(
        "--schema",
        action="store_true",
        help="Print the JSON Schema for the type instead of decoding"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(args)


def load_json(filepath: Union[str, Path]) -> Any:
    """
    Load and parse a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        # Enhance the error message with file information
        raise json.JSONDecodeError(
            f"Failed to parse JSON in {filepath}: {e.msg}",
            e.doc,
            e.pos
        ) from e


def resolve_type(reference: str) -> Any:
    """
    Import a type from a ``module:QualName`` reference.

    Args:
        reference: Reference such as ``myapp.messages:Envelope``

    Returns:
        The referenced object

    Raises:
        ValueError: If the reference is malformed or cannot be resolved
    """
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Type must be given as module:QualName, got '{reference}'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}") from e

    for attr in qualname.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            raise ValueError(f"Module '{module_name}' has no attribute '{qualname}'") from None
    return target


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the script."""
    args = parse_args(args)

    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        tp = resolve_type(args.type)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_USAGE

    if args.schema:
        try:
            schema = json_schema_for(tp, deny_unknown_fields=args.deny_unknown_fields)
        except UnsupportedTypeError as e:
            logger.error(str(e))
            return EXIT_USAGE
        print(json.dumps(schema, indent=2))
        return EXIT_OK

    try:
        data = load_json(args.data_file)
    except FileNotFoundError as e:
        logger.error(str(e))
        return EXIT_USAGE
    except json.JSONDecodeError as e:
        logger.error(str(e))
        return EXIT_USAGE

    decoder = Decoder(
        verbose=args.verbose,
        deny_unknown_fields=args.deny_unknown_fields
    )
    try:
        result = decoder.validate(data, tp)
    except UnsupportedTypeError as e:
        logger.error(str(e))
        return EXIT_USAGE

    # Report results
    if not result.valid:
        logger.error("Decoding failed:")
        for error in result.errors:
            logger.error(f"  - {error}")
            for i, cause in enumerate(error.causes):
                for nested in cause:
                    logger.debug(f"      variant {i}: {nested}")
        return EXIT_INVALID

    logger.info(f"Decoded {args.data_file} as {args.type}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
