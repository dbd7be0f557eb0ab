#!/usr/bin/env python3
"""
Command Line Interface for the Vertex AI RAG toolkit
"""

import sys
import json
import logging
import argparse

from .exceptions import RagToolkitError
from .core.models import EmbeddingModelConfig, RagCorpusState
from .sdk import VertexRagSDK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vertex AI RAG toolkit - manage Vertex AI RAG corpora"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="vertexai-rag-toolkit 1.0.0"
    )
    parser.add_argument("--project", help="Google Cloud project ID (or GOOGLE_PROJECT)")
    parser.add_argument("--region", help="Google Cloud region (or GOOGLE_REGION)")
    parser.add_argument("--access-token", help="OAuth2 access token (or GOOGLE_ACCESS_TOKEN)")
    parser.add_argument(
        "--credentials",
        help="Path to a YAML credentials file with a 'vertexairag' section"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Create a RAG corpus")
    create.add_argument("--display-name", required=True)
    create.add_argument("--description")
    create.add_argument("--embedding-model", help="Publisher model, e.g. text-embedding-004")

    read = subparsers.add_parser("read", help="Read a RAG corpus")
    read.add_argument("name", help="Full RAG corpus resource name")

    update = subparsers.add_parser("update", help="Update display name and description")
    update.add_argument("name", help="Full RAG corpus resource name")
    update.add_argument("--display-name", required=True)
    update.add_argument("--description")

    delete = subparsers.add_parser("delete", help="Delete a RAG corpus")
    delete.add_argument("name", help="Full RAG corpus resource name")

    import_cmd = subparsers.add_parser("import", help="Import an existing RAG corpus and read it")
    import_cmd.add_argument("name", help="Full RAG corpus resource name")

    return parser


def _print_diagnostics(diagnostics) -> bool:
    for diagnostic in diagnostics:
        print(f"❌ {diagnostic}" if diagnostic.severity == "error" else f"⚠️  {diagnostic}", file=sys.stderr)
    return not diagnostics.has_error()


def _print_state(state):
    print(json.dumps(state.to_dict() if state else None, indent=2))


def run(args) -> int:
    sdk = VertexRagSDK(
        project=args.project,
        region=args.region,
        access_token=args.access_token,
        credentials_file_path=args.credentials,
    )
    with sdk:
        corpus = sdk.rag_corpus

        if args.command == "create":
            desired = RagCorpusState(
                display_name=args.display_name,
                description=args.description,
                embedding_model_config=EmbeddingModelConfig(args.embedding_model) if args.embedding_model else None,
            )
            state, diagnostics = corpus.create(desired)
        elif args.command in ("read", "import"):
            seed = corpus.import_state(args.name)
            state, diagnostics = corpus.read(seed)
            if state is None and not diagnostics.has_error():
                print(f"❌ RAG corpus {args.name} not found", file=sys.stderr)
                return 1
        elif args.command == "update":
            prior, diagnostics = corpus.read(corpus.import_state(args.name))
            if prior is None:
                if not diagnostics.has_error():
                    print(f"❌ RAG corpus {args.name} not found", file=sys.stderr)
                _print_diagnostics(diagnostics)
                return 1
            desired = RagCorpusState(
                name=prior.name,
                display_name=args.display_name,
                description=args.description if args.description is not None else prior.description,
                embedding_model_config=prior.embedding_model_config,
            )
            state, diagnostics = corpus.update(desired, prior)
        else:
            diagnostics = corpus.delete(corpus.import_state(args.name))
            if _print_diagnostics(diagnostics):
                print(f"✅ RAG corpus {args.name} deleted")
                return 0
            return 1

        if not _print_diagnostics(diagnostics):
            return 1
        _print_state(state)
        return 0


def main():
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        sys.exit(run(args))
    except RagToolkitError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
