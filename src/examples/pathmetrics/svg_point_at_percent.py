"""Draw a path and mark the points at equal fractions of its length."""

import os

import svgwrite

from pathmetrics.path import PmPath

# Closed cubic loop followed by an open quadratic arc (two subpaths)
PATH_POINTS = [
    (0.0, 1.0),
    (20.0, 1.0),
    (0.0, 21.0),
    (21.0, 21.0),
    (21.0, 20.0),
    (1.0, 20.0),
    (21.0, 0.0),
    (1.0, 0.0),
    (1.0, 21.0),
    (1.0, 1.0),
    (21.0, 1.0),
]
PATH_COMMANDS = ["M", "C", "L", "C", "Z", "M", "Q"]

NUM_MARKERS = 21  # including start and end
OUTPUT_FILE = "data/output/example/svg/point_at_percent.svg"


def path_to_svg_string(path: PmPath) -> str:
    """Convert a PmPath to an SVG path data string."""
    parts = []
    for segment in path.iter_segments():
        if segment.command == "Z":
            parts.append("Z")
        else:
            coords = " ".join(f"{x:g},{y:g}" for x, y in segment.points)
            parts.append(f"{segment.command}{coords}")
    return " ".join(parts)


def main(output_file: str = OUTPUT_FILE) -> str:
    """Write an SVG showing the path and its percent markers, return the file name."""
    path = PmPath(PATH_POINTS, PATH_COMMANDS)
    length = path.length()
    print(f"Path : {path_to_svg_string(path)}")
    print(f"Length: {length:.6f}")

    dwg = svgwrite.Drawing(output_file, viewBox="-1 -1 23 23")
    dwg.add(dwg.path(path_to_svg_string(path), stroke="black", stroke_width="0.06", fill="none"))
    for index in range(NUM_MARKERS):
        percent = index / (NUM_MARKERS - 1)
        x, y = path.point_at_percent(percent)
        print(f"  {percent:5.2f} -> ({x:9.4f}, {y:9.4f})")
        dwg.add(dwg.circle(center=(x, y), r=0.25, fill="red"))

    directory = os.path.dirname(output_file)
    if directory:
        os.makedirs(directory, exist_ok=True)
    dwg.save()
    return output_file


if __name__ == "__main__":
    main()
