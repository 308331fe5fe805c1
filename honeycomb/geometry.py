import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]
Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)


# --------------------------- Utils ----------------------------
def clamp(x, a, b):
    return a if x < a else (b if x > b else x)


def lerp_color(c1, c2, t: float) -> Color:
    r = int(c1[0] + (c2[0] - c1[0]) * t)
    g = int(c1[1] + (c2[1] - c1[1]) * t)
    b = int(c1[2] + (c2[2] - c1[2]) * t)
    return (clamp(r, 0, 255), clamp(g, 0, 255), clamp(b, 0, 255))


def hex_vertices(center: Point, radius: float) -> List[Point]:
    """Six corners at -30 + 60*i degrees around ``center``."""
    cx, cy = center
    pts = []
    for i in range(6):
        angle = math.radians(60 * i - 30)
        pts.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return pts


def point_in_polygon(x: float, y: float, vertices: Sequence[Point]) -> bool:
    """Ray-crossing test: count edges crossed by a ray cast toward +x."""
    inside = False
    n = len(vertices)
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])
