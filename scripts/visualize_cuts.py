#!/usr/bin/env python3
"""
Visual check for the network cutter.
Plots a shape, its radial cut curves, and the resulting pieces.

Usage:
    python scripts/visualize_cuts.py [--cuts N] [--seed S] [--star] [--curved] [--output FILE]
"""

import argparse
import logging
import math
import os
import random
import sys

import matplotlib.pyplot as plt

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from network_cutter import cut, POLYGON_SHAPE
from geometry import as_points, bounding_box, polygon_centroid, signed_area


def create_test_shape():
    """Create a test outline (rectangle with notch)."""
    return [
        (0, 0),
        (200, 0),
        (200, 80),
        (140, 80),
        (140, 60),
        (60, 60),
        (60, 80),
        (0, 80),
    ]


def create_star(points=5, outer=100.0, inner=45.0):
    """Create a star outline centered on the origin."""
    star = []
    for i in range(points * 2):
        r = outer if i % 2 == 0 else inner
        angle = math.pi * i / points
        star.append((r * math.cos(angle), r * math.sin(angle)))
    return star


def plot_polygon(ax, polygon, color='blue', alpha=0.3, edgecolor='black', linewidth=1):
    """Plot a polygon."""
    if not polygon:
        return
    xy = [p.to_tuple() for p in polygon]
    poly = plt.Polygon(xy, facecolor=color, alpha=alpha, edgecolor=edgecolor, linewidth=linewidth)
    ax.add_patch(poly)


def plot_curve(ax, curve, color='red', linewidth=1):
    """Plot a sampled Bezier curve."""
    points = curve.get_points(100)
    ax.plot([p.x for p in points], [p.y for p in points], color=color, linewidth=linewidth)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot a randomized network cut')
    parser.add_argument('--cuts', type=int, default=5,
                        help='Number of cuts (the fan has twice as many curves)')
    parser.add_argument('--seed', type=int, default=42,
                        help='Random seed (default: 42)')
    parser.add_argument('--star', action='store_true',
                        help='Cut a star instead of the notched rectangle')
    parser.add_argument('--curved', action='store_true',
                        help='Smooth the outline before cutting')
    parser.add_argument('--output', default='/tmp/network_cut.png',
                        help='Output image path')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    shape = as_points(create_star() if args.star else create_test_shape())
    shape_type = 'curve' if args.curved else POLYGON_SHAPE
    result = cut(shape, args.cuts, shape_type, rng=random.Random(args.seed))

    status = 'validated' if result.is_validated else 'PARTIAL'
    print(f"{len(result.pieces)} pieces after {result.attempts} attempts "
          f"({status}, area ratio {result.area_ratio:.4f})")
    for i, piece in enumerate(result.pieces):
        print(f"  Piece {i}: {len(piece)} vertices, area {abs(signed_area(piece)):.1f}")

    bounds = bounding_box([p for piece in result.pieces for p in piece])
    margin = max(bounds.width, bounds.height) * 0.1

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))

    # Plot 1: Outline and cut curves
    ax1 = axes[0]
    ax1.set_title(f'Outline + {len(result.curves)} Cut Curves')
    plot_polygon(ax1, shape, color='lightblue', alpha=0.5, edgecolor='blue', linewidth=2)
    for curve in result.curves:
        plot_curve(ax1, curve)
    if result.curves:
        hub = result.curves[0].p0
        ax1.plot(hub.x, hub.y, 'o', color='red', markersize=6)

    # Plot 2: Pieces
    ax2 = axes[1]
    ax2.set_title(f'{len(result.pieces)} Pieces ({status})')
    colors = ['#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4', '#FFEAA7', '#DDA0DD']
    for i, piece in enumerate(result.pieces):
        plot_polygon(ax2, piece, color=colors[i % len(colors)], alpha=0.6, edgecolor='black', linewidth=1)
        c = polygon_centroid(piece)
        ax2.text(c.x, c.y, f'P{i}', ha='center', va='center', fontsize=10, fontweight='bold')

    for ax in axes:
        ax.set_xlim(bounds.min_x - margin, bounds.max_x + margin)
        ax.set_ylim(bounds.min_y - margin, bounds.max_y + margin)
        ax.set_aspect('equal')
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(args.output, dpi=150)
    print(f"\nSaved plot to {args.output}")
    plt.show()


if __name__ == '__main__':
    main()
