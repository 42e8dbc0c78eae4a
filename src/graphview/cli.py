"""graphview CLI: render graph documents to HTML and inspect their types."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv=None):
    """Main CLI entry point for graphview commands."""
    try:
        graphview_version = get_version("graphview")
    except PackageNotFoundError:
        graphview_version = "dev"

    parser = argparse.ArgumentParser(
        prog="graphview",
        description="graphview: type-colored, filterable graph rendering"
    )
    parser.add_argument("--version", action="version", version=f"graphview {graphview_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline details to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # render command
    render_parser = subparsers.add_parser(
        "render",
        help="Render a node-link JSON graph to a standalone HTML file",
        parents=[parent_parser]
    )
    render_parser.add_argument("graph", type=Path, help="Path to graph JSON (nodes + links/edges)")
    render_parser.add_argument(
        "--out",
        type=Path,
        required=True,
        help="Output HTML path"
    )
    render_parser.add_argument(
        "--filter",
        dest="types",
        action="append",
        default=None,
        metavar="TYPE",
        help="Show only nodes of this type (repeatable)"
    )
    render_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to render config JSON"
    )
    render_parser.add_argument("--width", type=int, default=960, help="Canvas width in pixels")
    render_parser.add_argument("--height", type=int, default=640, help="Canvas height in pixels")

    # legend command
    legend_parser = subparsers.add_parser(
        "legend",
        help="List the graph's node types with their colors",
        parents=[parent_parser]
    )
    legend_parser.add_argument("graph", type=Path, help="Path to graph JSON")
    legend_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to render config JSON"
    )
    legend_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit canonical JSON instead of text"
    )

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List graph documents in a directory",
        parents=[parent_parser]
    )
    list_parser.add_argument("directory", type=Path, help="Directory holding *.json graphs")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose, args.quiet)

    if args.command == "render":
        try:
            from .api import load_dataset, render_html
            from .config import RenderConfig, load_config

            config = load_config(args.config) if args.config else RenderConfig()
            dataset = load_dataset(args.graph)
            report, document = render_html(
                dataset,
                args.types,
                config=config,
                width=args.width,
                height=args.height,
            )
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(document, encoding="utf-8")

            if not args.quiet:
                print("[OK] Render complete")
                print(f"  Output: {out_path}")
                print(f"  Nodes: {report.node_count}  Edges: {report.edge_count}")
                if report.issues:
                    print(f"  Excluded: {len(report.issues)}")
                    for issue in report.issues:
                        print(f"    {issue.code.value}: {issue.message}")
            sys.exit(0)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "legend":
        try:
            from .api import legend_entries, load_dataset, summarize
            from .config import RenderConfig, load_config
            from .kernel.hash_utils import canonicalize_json

            config = load_config(args.config) if args.config else RenderConfig()
            dataset = load_dataset(args.graph)
            entries = legend_entries(dataset, config=config)
            summary = summarize(dataset)

            if args.json:
                print(canonicalize_json({
                    "summary": summary.model_dump(),
                    "legend": [e.model_dump() for e in entries],
                }))
            elif not args.quiet:
                print(f"Nodes: {summary.node_count} | Edges: {summary.edge_count}")
                for entry in entries:
                    print(f"  {entry.color}  {entry.type} ({entry.count})")
            sys.exit(0)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.command == "list":
        from ._internal.io.dataset_file import GraphDirectory

        directory = GraphDirectory(args.directory)
        if not directory.root.is_dir():
            print(f"Error: Not a directory: {directory.root}", file=sys.stderr)
            sys.exit(1)
        for name in directory.list_graphs():
            print(name)
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
