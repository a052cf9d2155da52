"""CLI for isnad-graph."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from isnad_graph import __version__
from isnad_graph.explorer import Dataset, NetworkExplorer
from isnad_graph.geo.routes import build_route_graph, path_length, shortest_path
from isnad_graph.layout import count_crossings
from isnad_graph.parser import (
    load_json,
    parse_isnads,
    parse_profiles,
    parse_route_segments,
)
from isnad_graph.render import render_svg
from isnad_graph.themes import THEMES

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_data_options = [
    click.option("--profiles", "profiles_file", type=click.Path(exists=True, path_type=Path),
                 default=None, help="Person-profile JSON table"),
    click.option("--isnads", "isnads_file", type=click.Path(exists=True, path_type=Path),
                 required=True, help="Isnad/chain JSON table"),
    click.option("--person", "person_id", default=None,
                 help="Center the graph on this person id"),
    click.option("--bio", "bio_id", default=None,
                 help="Center the graph on this biography subject"),
    click.option("--source", "sources", multiple=True,
                 help="Only use chains citing this source (repeatable)"),
]


def data_options(func):
    for option in reversed(_data_options):
        func = option(func)
    return func


def _load_view(profiles_file, isnads_file, person_id, bio_id, sources,
               width=None, height=None):
    if (person_id is None) == (bio_id is None):
        raise click.UsageError("Give exactly one of --person or --bio.")
    try:
        profiles = parse_profiles(load_json(profiles_file)) if profiles_file else {}
        chains = parse_isnads(load_json(isnads_file))
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)

    kwargs = {}
    if width is not None:
        kwargs["width"] = width
    if height is not None:
        kwargs["height"] = height
    explorer = NetworkExplorer(Dataset(profiles=profiles, chains=chains), **kwargs)
    if person_id is not None:
        return explorer.person_view(person_id, sources=sources or None)
    return explorer.biography_view(bio_id, sources=sources or None)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """isnad-graph: Lay out isnad transmission networks around a person or biography."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


@cli.command()
@data_options
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <isnads>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--width", type=float, default=None, help="Layout canvas width in pixels")
@click.option("--height", type=float, default=None, help="Layout canvas height in pixels")
@click.option("--hide-peers", is_flag=True,
              help="Hide same-layer and layer-skipping edges")
def render(
    profiles_file: Path | None,
    isnads_file: Path,
    person_id: str | None,
    bio_id: str | None,
    sources: tuple[str, ...],
    output: Path | None,
    theme: str,
    width: float | None,
    height: float | None,
    hide_peers: bool,
) -> None:
    """Render a transmission network to an SVG preview."""
    view = _load_view(profiles_file, isnads_file, person_id, bio_id, sources,
                      width=width, height=height)
    center = view.graph.nodes.get(view.graph.center_id)
    svg = render_svg(view, THEMES[theme], title=center.name if center else "",
                     show_peer_edges=not hide_peers)

    if output is None:
        output = isnads_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(view.graph.nodes)} nodes, "
               f"{len(view.graph.edges)} edges -> {output}")


@cli.command()
@data_options
def info(
    profiles_file: Path | None,
    isnads_file: Path,
    person_id: str | None,
    bio_id: str | None,
    sources: tuple[str, ...],
) -> None:
    """Show graph and layout statistics for a transmission network."""
    view = _load_view(profiles_file, isnads_file, person_id, bio_id, sources)
    graph, layout = view.graph, view.layout
    center = graph.nodes.get(graph.center_id)

    click.echo(f"Center: {center.name if center else '(none)'} [{graph.center_id}]")
    click.echo(f"Nodes: {len(graph.nodes)}")
    click.echo(f"Edges: {len(graph.edges)}")
    click.echo(f"Total weight: {sum(e.weight for e in graph.edges.values())}")
    click.echo("Layers:")
    for layer, size in layout.layer_sizes().items():
        click.echo(f"  {layer:+d}: {size} nodes")
    click.echo(f"Orphans: {len(layout.orphans)}")
    click.echo(f"Crossings: {count_crossings(layout, graph)}")


@cli.command()
@click.argument("routes_file", type=click.Path(exists=True, path_type=Path))
@click.argument("start")
@click.argument("end")
def route(routes_file: Path, start: str, end: str) -> None:
    """Find the shortest route between two toponym URIs."""
    try:
        segments = parse_route_segments(load_json(routes_file))
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)

    graph = build_route_graph(segments)
    path = shortest_path(graph, start, end)
    if path is None:
        click.echo(f"No route between {start} and {end}")
        raise SystemExit(1)

    click.echo(" -> ".join(path))
    click.echo(f"Length: {path_length(graph, path):g}")
