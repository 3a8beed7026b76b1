"""
Tests for the render pipeline.

Validates frame snapshots, PNG / SVG output, the GraphVisualizer facade
end to end, and the render_graph command-line script.
"""

import json
import math
import xml.etree.ElementTree as ET

import pytest

from src.graph.model import Graph
from src.interaction.controller import DragState, PointerEvent, PointerKind
from src.layout.simulation import Simulation, SimulationConfig
from src.render.frame import Frame, LinkView, build_frame, frame_to_dict
from src.render.matplotlib_renderer import FrameRenderer
from src.render.visualizer import GraphVisualizer
from src.visual.labels import label_font_size
from src.visual.palette import NODE_COLORS, SECONDARY_COLOR
from tests.conftest import char_width, node_record

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'


# ============================================================
# TEST DATA FIXTURES
# ============================================================

@pytest.fixture
def three_companies_two_vcs():
    """Three companies, two VCs, four investments."""
    return {
        'companies': [
            {'name': 'A', 'valuation': 10e9, 'sector': 'Technology'},
            {'name': 'B', 'valuation': 40e9, 'sector': 'Fintech'},
            {'name': 'C', 'valuation': 90e9, 'sector': 'Technology'},
        ],
        'vcs': [
            {'name': 'V1'},
            {'name': 'V2'},
        ],
        'investments': [
            {'vc': 'V1', 'company': 'A', 'amount': 100e6},
            {'vc': 'V1', 'company': 'B', 'amount': 2e9},
            {'vc': 'V2', 'company': 'B', 'amount': 500e6},
            {'vc': 'V2', 'company': 'C', 'amount': 1.5e9},
        ],
    }


@pytest.fixture
def viz():
    return GraphVisualizer(800, 600, SimulationConfig(seed=11), measure=char_width)


# ============================================================
# FRAME MODEL
# ============================================================

class TestBuildFrame:

    def test_frame_mirrors_simulation(self, loaded_simulation):
        loaded_simulation.step()
        frame = build_frame(loaded_simulation)
        assert len(frame.nodes) == 5
        assert len(frame.links) == 4
        assert frame.tick == 1
        assert frame.alpha == pytest.approx(0.98)
        assert (frame.width, frame.height) == (800, 600)
        stripe = next(n for n in frame.nodes if n.id == 'stripe')
        node = loaded_simulation.graph.get('stripe')
        assert (stripe.x, stripe.y, stripe.radius) == (node.x, node.y, node.radius)

    def test_link_views_use_endpoint_positions(self, loaded_simulation):
        frame = build_frame(loaded_simulation)
        link = frame.links[0]
        source = loaded_simulation.graph.get(link.source_id)
        target = loaded_simulation.graph.get(link.target_id)
        assert (link.source_x, link.source_y) == (source.x, source.y)
        assert (link.target_x, link.target_y) == (target.x, target.y)

    def test_unplaced_nodes_skipped(self, small_graph):
        sim = Simulation(800, 600, SimulationConfig(seed=1))
        sim.graph = small_graph
        frame = build_frame(sim)
        assert frame.is_empty
        assert frame.links == ()

    def test_empty_simulation(self):
        sim = Simulation(800, 600)
        sim.load(Graph())
        assert build_frame(sim).is_empty

    def test_midpoint(self):
        view = LinkView('a', 'b', 0, 0, 10, 20, 1.0, '#999999')
        assert view.midpoint == (5.0, 10.0)

    def test_frame_to_dict_is_json(self, loaded_simulation):
        data = frame_to_dict(build_frame(loaded_simulation))
        decoded = json.loads(json.dumps(data))
        assert decoded['width'] == 800
        assert {n['id'] for n in decoded['nodes']} == {'stripe', 'coinbase', 'airbnb', 'sequoia', 'a16z'}
        assert set(decoded['links'][0]) >= {'source_id', 'target_id', 'stroke_width', 'color', 'label_text'}


# ============================================================
# IMAGE OUTPUT
# ============================================================

class TestFrameRenderer:

    def test_png_and_svg(self, loaded_simulation, tmp_path):
        loaded_simulation.run()
        png, svg = FrameRenderer().render(
            build_frame(loaded_simulation),
            png_path=tmp_path / 'graph.png',
            svg_path=tmp_path / 'graph.svg',
            legend=[('Fintech', NODE_COLORS[0])],
        )
        assert png.read_bytes()[:8] == PNG_MAGIC
        root = ET.parse(str(svg)).getroot()
        assert root.tag.endswith('svg')

    def test_only_requested_formats(self, loaded_simulation, tmp_path):
        png, svg = FrameRenderer().render(build_frame(loaded_simulation), png_path=tmp_path / 'only.png')
        assert png.exists()
        assert svg is None

    def test_creates_parent_dirs(self, loaded_simulation, tmp_path):
        target = tmp_path / 'nested' / 'dir' / 'graph.png'
        FrameRenderer().render(build_frame(loaded_simulation), png_path=target)
        assert target.exists()

    def test_empty_frame(self, tmp_path):
        png, _ = FrameRenderer().render(Frame(width=400, height=300), png_path=tmp_path / 'empty.png')
        assert png.stat().st_size > 0

    def test_figure_matches_viewport(self, loaded_simulation):
        fig, ax = FrameRenderer(dpi=100).draw(build_frame(loaded_simulation))
        try:
            assert tuple(fig.get_size_inches()) == pytest.approx((8.0, 6.0))
            # y axis inverted to screen coordinates
            assert ax.get_ylim() == (600.0, 0.0)
        finally:
            import matplotlib.pyplot as plt
            plt.close(fig)


# ============================================================
# VISUALIZER (END TO END)
# ============================================================

class TestGraphVisualizer:

    def test_load_and_converge(self, viz, three_companies_two_vcs):
        graph = viz.load(three_companies_two_vcs)
        assert len(graph.nodes) == 5
        assert len(graph.links) == 4
        ticks = viz.run()
        assert 0 < ticks <= 1000
        assert not viz.running
        for node in viz.frame().nodes:
            assert math.isfinite(node.x) and math.isfinite(node.y)

    def test_vc_magnitude_aggregated(self, viz, three_companies_two_vcs):
        graph = viz.load(three_companies_two_vcs)
        assert graph.get('V1').magnitude == pytest.approx(2.1e9)
        assert graph.get('V2').magnitude == pytest.approx(2.0e9)

    def test_drag_moves_and_release_frees(self, viz, three_companies_two_vcs):
        viz.load(three_companies_two_vcs)
        viz.run()
        events = []
        viz.on_drag_start(events.append)

        assert viz.pointer(PointerEvent(PointerKind.DOWN, 500, 500, node_id='A')) is DragState.DRAGGING
        assert viz.running
        for _ in range(5):
            viz.step()
        node = viz.graph.get('A')
        assert (node.x, node.y) == (500, 500)

        viz.pointer(PointerEvent(PointerKind.UP, 500, 500))
        viz.step()
        assert (node.x, node.y) != (500, 500)
        assert events == ['A']

    def test_legend_order(self, viz, three_companies_two_vcs):
        viz.load(three_companies_two_vcs)
        assert viz.legend() == [
            ('Technology', NODE_COLORS[0]),
            ('Fintech', NODE_COLORS[1]),
            ('VC', SECONDARY_COLOR),
        ]

    def test_palettes_survive_reload(self, viz, three_companies_two_vcs):
        viz.load(three_companies_two_vcs)
        viz.load({'nodes': [node_record('x', category='Fintech')]})
        assert viz.graph.get('x').color == NODE_COLORS[1]

    def test_separate_visualizers_do_not_share_colors(self, three_companies_two_vcs):
        first = GraphVisualizer(800, 600, SimulationConfig(seed=1), measure=char_width)
        second = GraphVisualizer(800, 600, SimulationConfig(seed=1), measure=char_width)
        first.load(three_companies_two_vcs)
        second.load({'nodes': [node_record('x', category='Fintech')]})
        assert second.graph.get('x').color == NODE_COLORS[0]

    def test_reload_resets_drag(self, viz, three_companies_two_vcs):
        viz.load(three_companies_two_vcs)
        viz.pointer(PointerEvent(PointerKind.DOWN, 0, 0, node_id='A'))
        viz.load(three_companies_two_vcs)
        assert not viz.controller.is_dragging

    def test_empty_payload(self, viz):
        graph = viz.load({'nodes': [], 'links': []})
        assert len(graph) == 0
        assert viz.run() == 0
        assert viz.frame().is_empty
        assert viz.legend() == []

    def test_resize(self, viz, three_companies_two_vcs):
        viz.load(three_companies_two_vcs)
        viz.run()
        viz.resize(1200, 900)
        assert viz.running
        assert viz.frame().width == 1200

    def test_node_labels_drawn_at_measured_size(self, viz, three_companies_two_vcs):
        """Labels are painted at the same font size they were truncated for."""
        graph = viz.load(three_companies_two_vcs)
        viz.run()
        fig, ax = viz.renderer.draw(viz.frame())
        try:
            sizes = {t.get_text(): t.get_fontsize() for t in ax.texts}
        finally:
            import matplotlib.pyplot as plt
            plt.close(fig)
        pt = 72.0 / viz.renderer.dpi
        labeled = [n for n in graph.nodes if n.label]
        assert labeled
        for node in labeled:
            assert sizes[node.label] == pytest.approx(label_font_size(node.radius) * pt)

    def test_render(self, viz, three_companies_two_vcs, tmp_path):
        viz.load(three_companies_two_vcs)
        viz.run()
        png, svg = viz.render(png_path=tmp_path / 'g.png', svg_path=tmp_path / 'g.svg')
        assert png.read_bytes()[:8] == PNG_MAGIC
        assert svg.exists()

    def test_from_settings(self):
        from config.settings import Settings
        viz = GraphVisualizer.from_settings(Settings(), measure=char_width)
        assert viz.simulation.width == 1600
        assert viz.size_mode == 'magnitude'


# ============================================================
# COMMAND LINE
# ============================================================

class TestRenderGraphScript:

    def test_summary_lists_labeled_nodes(self, tmp_path, sample_investments_path, capsys):
        from scripts.render_graph import main
        main([
            '--input', str(sample_investments_path),
            '--output-dir', str(tmp_path),
            '--format', 'json',
            '--seed', '5',
        ])
        out = capsys.readouterr().out
        assert 'Labeled nodes:' in out
        assert '$' in out.split('Labeled nodes:')[1]

    def test_json_output(self, tmp_path, sample_investments_path):
        from scripts.render_graph import main
        code = main([
            '--input', str(sample_investments_path),
            '--output-dir', str(tmp_path),
            '--format', 'json',
            '--seed', '5',
            '--width', '1000',
            '--height', '800',
        ])
        assert code == 0
        data = json.loads((tmp_path / 'investment_graph.json').read_text(encoding='utf-8'))
        assert len(data['nodes']) == 21
        assert len(data['links']) == 33
        assert data['width'] == 1000

    def test_png_output(self, tmp_path, sample_investments_path):
        from scripts.render_graph import main
        code = main([
            '--input', str(sample_investments_path),
            '--output-dir', str(tmp_path),
            '--format', 'png',
            '--name', 'sample',
            '--size-mode', 'degree',
            '--seed', '5',
        ])
        assert code == 0
        assert (tmp_path / 'sample.png').read_bytes()[:8] == PNG_MAGIC
        assert (tmp_path / 'sample.svg').exists()

    def test_invalid_input_returns_error(self, tmp_path):
        from scripts.render_graph import main
        bad = tmp_path / 'bad.json'
        bad.write_text('{"nodes": [{"id": "a"}]}', encoding='utf-8')
        assert main(['--input', str(bad), '--output-dir', str(tmp_path)]) == 1

    def test_missing_input_returns_error(self, tmp_path):
        from scripts.render_graph import main
        assert main(['--input', str(tmp_path / 'nope.json'), '--output-dir', str(tmp_path)]) == 1
