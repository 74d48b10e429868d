"""Default configuration values for Cosmoscale.

Configuration is organized into groups, each a flat set of values keyed
by name.
"""

DEFAULT_CONFIG = {
    # --- Appearance ---
    "appearance": {
        "viewport_background": "#000000",
        "label_font_family": "Helvetica",
        "show_labels": True,
        "min_label_px": 4,  # labels smaller than this are hidden
        "max_label_px": 220,  # labels larger than this are hidden
    },
    # --- Navigator ---
    "navigator": {
        "initial_log_position": -100.0,  # ln(zoom distance in meters)
        "resting_velocity_floor": 0.015,
        "active_velocity_floor": 0.001,
        "wheel_step": 0.1,
        "pinch_gain": 0.001,
        "damping": 0.95,
        "edge_damping": 0.85,
        "min_zoom_factor": 0.5,  # x smallest object size
        "max_zoom_factor": 50.0,  # x largest object size
    },
    # --- 3D Viewport ---
    "viewport": {
        "camera_fov": 50.0,
        "near_clip": 1e-9,
        "far_clip": 1e28,
        "frame_interval_ms": 16,
        "sphere_slices": 24,
        "sphere_stacks": 12,
        "textures_directory": "",  # empty = <package>/assets
    },
    # --- Catalog ---
    "catalog": {
        "catalog_path": "",  # empty = built-in objects
        "light_year_threshold_m": 1e16,
    },
    # --- Logging ---
    "logging": {
        "log_level": "INFO",  # DEBUG, INFO, WARNING, ERROR, CRITICAL
        "log_to_file": True,
        "log_retention_days": 30,
        "log_max_size_mb": 50,
        "log_console_output": True,
    },
}
