#!/usr/bin/env python3
"""
Command-line script to build, validate and export an ontology from a corpus.

HOW TO RUN:
The virtual environment .venv should be activated before running the script.

From the src directory, run:
    python build_ontology.py <corpus.json> [--format FORMAT] [--output PATH] [--log-level LEVEL]

Example:
    python build_ontology.py ../data/animals.json --format turtle --output ../data/animals.ttl

The corpus file holds a list of documents ({"title", "text", "tags"}) or an
object with a "documents" list. Defaults for the namespace, export format and
log level are read from the environment (a .env file is honoured):
ONTOLOGY_NAMESPACE, ONTOLOGY_EXPORT_FORMAT, ONTOLOGY_LOG_LEVEL.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from corpus import JsonDocumentSource
from modeler import OntologyModelerService
from ontology import OntologyExporter

logger = logging.getLogger("build_ontology")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build, validate and export an ontology from a JSON corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the ontology as Turtle
  python build_ontology.py corpus.json

  # Write OWL/XML to a file
  python build_ontology.py corpus.json --format owl --output ontology.owl
        """
    )
    parser.add_argument("corpus", help="Path to the JSON corpus file")
    parser.add_argument(
        "--format",
        choices=OntologyExporter.supported_formats(),
        default=os.getenv("ONTOLOGY_EXPORT_FORMAT", "turtle"),
        help="Export format (default: $ONTOLOGY_EXPORT_FORMAT or turtle)",
    )
    parser.add_argument("--output", help="Write the export here instead of standard output")
    parser.add_argument(
        "--namespace",
        default=os.getenv("ONTOLOGY_NAMESPACE"),
        help="Base IRI of the exported ontology (default: $ONTOLOGY_NAMESPACE)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("ONTOLOGY_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: $ONTOLOGY_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Build the ontology for a corpus file. Returns the process exit code."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(levelname)s: %(message)s')

    source = JsonDocumentSource(args.corpus)
    modeler = OntologyModelerService(namespace=args.namespace)
    try:
        report = modeler.ingest_source(source)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read corpus {args.corpus}: {e}")
        return 1

    summary = report.summary()
    logger.info(f"Ingest summary: {json.dumps(summary)}")

    result = modeler.validate_ontology()
    for issue in result.errors:
        logger.error(f"{issue.type}: {issue.message}")
    for issue in result.warnings:
        logger.warning(f"{issue.type}: {issue.message}")
    logger.info(f"Quality metrics: {json.dumps(result.metrics.as_dict())}")

    export = modeler.export_to_format(args.format)
    if args.output:
        Path(args.output).write_text(export.content, encoding="utf-8")
        logger.info(f"Wrote {export.format} export to {args.output}")
    else:
        print(export.content)

    return 0 if result.valid else 2


if __name__ == "__main__":
    sys.exit(main())
