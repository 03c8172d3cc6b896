"""
Command-line interface for benthic-affinity.

The `benthic-affinity` command imports the prepared observation, trait and
species-list tables into the data store, runs the summarize and report
flows, prints one species' habitat profile and serves the built report.
"""

from __future__ import annotations

import argparse
import http.server
import sys
from functools import partial
from pathlib import Path

from benthic_affinity import __version__
from benthic_affinity.analysis import SpeciesHabitatSummary, index_traits, summarize_species
from benthic_affinity.config import get_settings
from benthic_affinity.datasources.abundance import load_observations
from benthic_affinity.datasources.species import load_species_list, load_traits
from benthic_affinity.flows.build import build_all
from benthic_affinity.flows.summarize import summarize_all
from benthic_affinity.reference import MISSING_CATEGORY
from benthic_affinity.store import DataStore

# Input tables that can be imported into the store
IMPORT_KINDS = ("observations", "traits", "species")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="benthic-affinity",
        description="Abundance-weighted sediment and seabed-habitat profiles for benthic species",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'import' command - copy an upstream table into the data store
    import_parser = subparsers.add_parser("import", help="Import a prepared input table")
    import_parser.add_argument("kind", choices=IMPORT_KINDS, help="Which input table")
    import_parser.add_argument("path", type=Path, help="CSV file to import")

    subparsers.add_parser("summarize", help="Compute species habitat summaries")
    subparsers.add_parser("report", help="Build the HTML report from the summaries")
    subparsers.add_parser("refresh", help="Summarize then build the report")

    # 'species' command - summarize one species and print it
    species_parser = subparsers.add_parser("species", help="Show one species' habitat summary")
    species_parser.add_argument("species_id", type=str, help="Species identifier (AphiaID)")

    # 'serve' command - serve built report locally
    serve_parser = subparsers.add_parser("serve", help="Serve the report locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: serve_port from settings)",
    )

    return parser


def _store() -> DataStore:
    return DataStore(get_settings().data_dir)


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Data directory: {settings.data_dir}")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """Handle the 'import' command: copy a CSV into its store tier."""
    settings = get_settings()
    src: Path = args.path
    if not src.is_file():
        print(f"Error: file not found: {src}", file=sys.stderr)
        return 1

    destinations = {
        "observations": settings.observations_path,
        "traits": settings.traits_path,
        "species": settings.species_list_path,
    }
    stored = _store().import_file(destinations[args.kind], src, source="upstream", kind=args.kind)
    print(f"Imported {args.kind}: {stored}")
    return 0


def cmd_summarize(_args: argparse.Namespace) -> int:
    """Handle the 'summarize' command."""
    try:
        result = summarize_all()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if "error" in result:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1
    print(f"Summarized {result['species']} species over {result['events']} events.")
    return 0


def cmd_report(_args: argparse.Namespace) -> int:
    """Handle the 'report' command."""
    try:
        result = build_all()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if "error" in result:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1
    print(f"Report written: {result['output']}")
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: summarize then build the report."""
    code = cmd_summarize(args)
    if code != 0:
        return code
    return cmd_report(args)


def format_summary(summary: SpeciesHabitatSummary) -> str:
    """Plain-text rendering of one species summary for the terminal."""
    name = summary.scientific_name or summary.species_id
    lines = [f"Species: {name} ({summary.species_id})"]
    lines.append(f"  Observations: {summary.total_occ}  Events: {summary.n_events}")
    if not summary.has_observations:
        lines.append("  No observations of this species.")
        return "\n".join(lines)

    lines.append(
        f"  Total abundance: {summary.total_abundance:g}  "
        f"Mean abundance: {summary.mean_abundance:.2f}"
    )
    for attribute, mean in summary.continuous.items():
        value = "n/a" if mean is None else f"{mean:.2f}"
        lines.append(f"  {attribute}: {value}")
    for attribute, freqs in summary.categorical.items():
        parts = [
            f"{'no value' if cat == MISSING_CATEGORY else cat} {freq:.1%}"
            for cat, freq in sorted(freqs.items(), key=lambda kv: kv[1], reverse=True)
        ]
        lines.append(f"  {attribute}: {', '.join(parts)}")
    for trait, value in summary.traits.items():
        lines.append(f"  {trait}: {'unknown' if value is None else value}")
    return "\n".join(lines)


def cmd_species(args: argparse.Namespace) -> int:
    """Handle the 'species' command: summarize one species directly from the inputs."""
    settings = get_settings()
    store = _store()
    obs_path = store.file_path(settings.observations_path)
    if obs_path is None:
        print("No observation table found. Run 'benthic-affinity import' first.", file=sys.stderr)
        return 1

    try:
        table = load_observations(obs_path)
        traits_path = store.file_path(settings.traits_path)
        traits = index_traits(load_traits(traits_path)) if traits_path else {}
        species_path = store.file_path(settings.species_list_path)
        species = load_species_list(species_path) if species_path else []
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    names = {record.species_id: record.scientific_name for record in species}
    summary = summarize_species(
        args.species_id,
        table.observations,
        scientific_name=names.get(args.species_id),
        traits=traits,
    )
    print(format_summary(summary))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built report locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.serve_port
    site_dir = _store().derived / "site"

    if not site_dir.exists():
        print("No report found. Run 'benthic-affinity refresh' first.", file=sys.stderr)
        return 1

    handler = partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving report on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    if getattr(args, "debug", False):
        print(f"Debug mode enabled. Settings: {get_settings()}")

    commands = {
        "info": cmd_info,
        "import": cmd_import,
        "summarize": cmd_summarize,
        "report": cmd_report,
        "refresh": cmd_refresh,
        "species": cmd_species,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
