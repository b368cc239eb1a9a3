"""
Configuration and Styling Module.

This module contains all configuration and styling variables for the application,
including the panel geometry defaults, the rendering offsets and the color theme.
"""

# --- Panel Geometry ---
# Side length of a single triangle panel in layout units (Nanoleaf Light Panels).
DEFAULT_SIDE_LENGTH = 150
# Global rotation applied to the whole array, in degrees.
DEFAULT_ROTATION = 0

# Orientations (degrees) at which a panel sits upside down in the tessellation.
INVERTED_ORIENTATIONS = frozenset({60, 180, 300})

# Fixed angle between an upright and an inverted panel.
INVERSION_ANGLE = 180
# The inverted markers pivot this fraction of a side length below the centroid.
INVERSION_PIVOT_DROP = 0.1

# Reference canvas used by the screen-space marker helpers.
MARKER_CANVAS_WIDTH = 1000
MARKER_CANVAS_HEIGHT = 1000

# --- Rendering Offsets (degrees) ---
# Each panel path is drawn at rotate(orientation + PANEL_ROTATION_OFFSET).
PANEL_ROTATION_OFFSET = 60
# Panel labels are counter-rotated so they read upright after the view transform.
LABEL_ROTATION_OFFSET = -120
# The whole group is rotated by (rotation + VIEW_ROTATION_OFFSET) around its midpoint.
VIEW_ROTATION_OFFSET = 180


# --- Style Theme ---

DEFAULT_PANEL_COLOR = '#333333'    # Fill used when a panel carries no color.
DEFAULT_STROKE_COLOR = '#ffffff'   # Stroke used when a panel carries no strokeColor.
DEFAULT_STROKE_WIDTH = 2
LABEL_COLOR = '#FFFFFF'

BACKGROUND_COLOR = '#212121' # Dark charcoal app background.
PLOT_AREA_COLOR = '#2B2B2B'  # Slightly lighter plot area.
TEXT_COLOR = '#FFFFFF'
HOVER_MARKER_COLOR = 'rgba(0,0,0,0)'

# --- Sample Data ---
SAMPLE_ROWS = 2
SAMPLE_COLS = 6
SAMPLE_PALETTE = ['#FF6B6B', '#FFD93D', '#6BCB77', '#4D96FF', '#C77DFF', '#FF9F1C']
