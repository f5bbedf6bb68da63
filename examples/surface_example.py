"""
Example script for building and viewing surface graphs.

This script demonstrates how to:
1. Build a surface graph without a window
2. Inspect the vertex table
3. Show surfaces in the interactive viewer
"""

import os
import sys
import math

# Add the parent directory to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grapho_surface import create_graph
from grapho_surface.visualization import GraphViewer


def ripple(x, y):
    r = math.hypot(x, y)
    return 40 * math.sin(r / 10) / (r / 10) if r else 40.0


def main():
    """Run the surface example."""
    print("Grapho Surface - Example Script for Surface Graphs")
    print("--------------------------------------------------")

    print("\n1. Building a paraboloid on a 4 x 4 grid...")
    mesh = create_graph(lambda x, y: x * x + y * y,
                        {'xMin': -1, 'xMax': 1, 'yMin': -1, 'yMax': 1, 'segments': 4})
    print(f"   {mesh}")
    print(f"   Height range: {mesh.height_range}")

    print("\n2. Vertex table:")
    print(mesh.to_dataframe().head(10))

    print("\n3. Opening the viewer (close the window to exit)...")
    viewer = GraphViewer()
    viewer.create_graph(ripple, name='ripple')
    # log is undefined for x <= 0, leaving a gap in the surface
    viewer.create_graph(lambda x, y: 20 * math.log(x) + y / 5,
                        {'xMin': -50, 'xMax': 150, 'yMin': 150, 'yMax': 300, 'segments': 30},
                        name='log')
    viewer.show()


if __name__ == "__main__":
    main()
