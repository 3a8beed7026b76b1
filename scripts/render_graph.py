"""
Investment Graph Renderer
=========================

Lays out an investment network with the force simulation and writes the
settled frame in one or more formats:

    - PNG + SVG (matplotlib, for printing and embedding)
    - JSON frame (node / link positions, colors, labels, for other hosts)

Input is either a ``{nodes, links}`` payload or an investment export
(``{companies, vcs, investments}``).

Usage:
    python scripts/render_graph.py                                # sample data, all formats
    python scripts/render_graph.py --input data/graph.json        # custom payload
    python scripts/render_graph.py --format png --size-mode degree
    python scripts/render_graph.py --width 1200 --height 800 --seed 7
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from config.settings import settings
from src.graph.payload import PayloadError, load_payload_file
from src.layout.scheduler import SynchronousScheduler
from src.layout.simulation import SimulationConfig
from src.render.frame import frame_to_dict
from src.render.visualizer import GraphVisualizer
from src.utils.logging_setup import configure_logging
from src.visual.attributes import SIZE_MODES
from src.visual.formatting import format_currency

logger = logging.getLogger(__name__)

DEFAULT_INPUT = PROJECT_DIR / 'data' / 'sample_investments.json'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Lay out and render an investment graph.'
    )
    parser.add_argument(
        '--input', type=Path, default=DEFAULT_INPUT,
        help=f'Payload JSON file (default: {DEFAULT_INPUT})',
    )
    parser.add_argument(
        '--output-dir', type=Path, default=PROJECT_DIR / settings.OUTPUT_DIR,
        help='Output directory (default: OUTPUT_DIR setting)',
    )
    parser.add_argument(
        '--name', default='investment_graph',
        help='Base file name for outputs (default: investment_graph)',
    )
    parser.add_argument(
        '--format', choices=['all', 'png', 'json'], default='all',
        help='Output format (default: all)',
    )
    parser.add_argument(
        '--size-mode', choices=SIZE_MODES, default=settings.SIZE_MODE,
        help='Node sizing: magnitude (valuation / investment) or degree',
    )
    parser.add_argument('--width', type=float, default=settings.VIEWPORT_WIDTH)
    parser.add_argument('--height', type=float, default=settings.VIEWPORT_HEIGHT)
    parser.add_argument('--seed', type=int, default=settings.LAYOUT_SEED,
                        help='Seed for initial positions (reproducible layouts)')
    parser.add_argument('--title', default=None, help='Optional title drawn on the image')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)

    config = SimulationConfig.from_settings(settings)
    config.seed = args.seed

    viz = GraphVisualizer(args.width, args.height, config, size_mode=args.size_mode)
    if args.title:
        viz.renderer.title = args.title

    try:
        payload = load_payload_file(args.input)
    except (PayloadError, OSError) as e:
        logger.error("Cannot load %s: %s", args.input, e)
        return 1

    graph = viz.load(payload)
    logger.info("Nodes: %d, Links: %d (dropped %d)",
                len(graph.nodes), len(graph.links), graph.dropped_links)

    ticks = SynchronousScheduler().run(viz.simulation)
    logger.info("Converged after %d ticks", ticks)

    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []

    if args.format in ('all', 'png'):
        png_path, svg_path = viz.render(
            png_path=output_dir / f'{args.name}.png',
            svg_path=output_dir / f'{args.name}.svg',
        )
        results += [('PNG', png_path), ('SVG', svg_path)]

    if args.format in ('all', 'json'):
        json_path = output_dir / f'{args.name}.json'
        json_path.write_text(json.dumps(frame_to_dict(viz.frame()), indent=2), encoding='utf-8')
        results.append(('JSON', json_path))

    print('=' * 60)
    print('Generation Summary')
    print('=' * 60)
    for fmt_label, path in results:
        size = path.stat().st_size / 1024
        print(f'  {fmt_label:6s} {path} ({size:.0f} KB)')

    labeled = sorted((n for n in graph.nodes if n.label), key=lambda n: n.radius, reverse=True)
    if labeled:
        print('\nLabeled nodes:')
        for node in labeled:
            print(f'  {node.name:30s} {format_currency(node.magnitude or 0):>10s}  [{node.category}]')

    return 0


if __name__ == '__main__':
    sys.exit(main())
