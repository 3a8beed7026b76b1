"""
Investment Graph - Main Runner Script
======================================

Properly run any module from the project root.
Handles Python path setup automatically.

Usage:
    python run.py render [options]   # Lay out and render a graph (see scripts/render_graph.py)
    python run.py check              # Smoke-check the pipeline on the sample data
"""

import sys
import os

# Add project root to Python path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)


def main():
    """Main entry point"""

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1].lower()

    # Remove command from sys.argv so submodules get correct args
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    try:
        if command == 'render':
            from scripts import render_graph
            sys.exit(render_graph.main())

        elif command == 'check':
            from src.graph.payload import load_payload_file
            from src.render.visualizer import GraphVisualizer

            print("Checking layout pipeline...\n")
            payload = load_payload_file(os.path.join(PROJECT_ROOT, 'data', 'sample_investments.json'))
            print(f"Payload loaded: {len(payload.nodes)} nodes, {len(payload.links)} links")

            viz = GraphVisualizer(1600, 1000)
            viz.load(payload)
            ticks = viz.run()
            print(f"Layout converged in {ticks} ticks")

            frame = viz.frame()
            labeled = sum(1 for n in frame.nodes if n.label)
            print(f"Frame: {len(frame.nodes)} nodes, {len(frame.links)} links, {labeled} labels")
            print("\nAll checks passed!")

        else:
            print(f"Unknown command: {command}")
            print(__doc__)
            sys.exit(1)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        print(f"\nError: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
