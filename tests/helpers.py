"""
Shared fixtures for the test suites.
"""

import numpy as np

from target_locator import HoleCheck, MetricSpec, Polygon, TargetProfile

# Bounds and scoring of the 2016 tower goal (800x600 camera).
PROFILE_2016 = TargetProfile(
    name="tower-2016",
    height=MetricSpec(25, 120, 80, 1),
    width=MetricSpec(40, 200, 100, 1),
    vertex_count=MetricSpec(3, 12, 8, 100),
    aspect_ratio=MetricSpec(1, 3, 1.5, 1000),
    area=MetricSpec(1200, 15000, 5000, 0.03),
    min_y=50,
    max_y=720,
    polygon_epsilon=5.0,
    hole_check=HoleCheck(),
)

CONFIG_DICT = {
    "profile": {
        "name": "tower-2016",
        "height": {"min": 25, "max": 120, "ideal": 80, "weight": 1},
        "width": {"min": 40, "max": 200, "ideal": 100, "weight": 1},
        "vertex_count": {"min": 3, "max": 12, "ideal": 8, "weight": 100},
        "aspect_ratio": {"min": 1, "max": 3, "ideal": 1.5, "weight": 1000},
        "area": {"min": 1200, "max": 15000, "ideal": 5000, "weight": 0.03},
        "min_y": 50,
        "max_y": 720,
        "hole_check": {"bottom": 0.5, "left": 0.25, "right": 0.25},
    },
    "camera": {
        "image_width_px": 800,
        "image_height_px": 600,
        "fov_vertical_deg": 51,
        "fov_horizontal_deg": 67,
        "location": [9, -12, 0],
        "height_above_floor": 12,
    },
    "target": {"width": 20, "height": 14, "elevation": 80},
    "vertical_edge_tolerance": 0.05,
}


def u_shape(x=100, y=100, width=120, height=80, arm=20, depth=60):
    """
    Eight vertex U shaped polygon (opening at the top) with its bounding
    box at (x, y, width, height).
    """

    return Polygon(
        [
            (x, y),
            (x + arm, y),
            (x + arm, y + depth),
            (x + width - arm, y + depth),
            (x + width - arm, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
        ]
    )


def rectangle(x, y, width, height):
    return Polygon(
        [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
    )


def u_mask(shape=(600, 800), x=100, y=100, width=120, height=80, arm=20,
           depth=60):
    """
    Binary mask holding a filled U matching u_shape().
    """

    mask = np.zeros(shape, dtype=np.uint8)
    mask[y:y + height + 1, x:x + width + 1] = 255
    mask[y:y + depth, x + arm:x + width - arm + 1] = 0
    return mask
