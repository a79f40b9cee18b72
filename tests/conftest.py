"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Debug mode is on so
    kernel assertions (zero-length normalize) raise instead of producing NaN.
    """
    ti.init(arch=ti.cpu, debug=True)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before each test.

    This ensures tests are isolated from each other.
    """
    # Import here to avoid circular imports and ensure Taichi is initialized
    from raycaster.core.integrator import clear_render_target
    from raycaster.core.lights import clear_lights
    from raycaster.materials.phong import clear_phong_materials
    from raycaster.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_lights()
        clear_phong_materials()
        clear_render_target()

    # Clear everything before test
    _clear_all()

    yield

    # Clear everything after test
    _clear_all()
