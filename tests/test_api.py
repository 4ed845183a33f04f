import pytest

from api.render_api import RenderAPI, RenderConfigBuilder
from fractals.base import Viewport
from fractals.settings_validator import SettingsError
from rendering.scheduler import CooperativeScheduler
from rendering.service import RenderService
from rendering.state import ShareableState
from utils.enums import Algorithm, ColorScheme


@pytest.fixture
def api():
    return RenderAPI(RenderService(16, 12, scheduler=CooperativeScheduler()))


def test_builder_applies_all_changes(api):
    (api.configure()
        .resolution("360p")
        .algorithm(Algorithm.MANDELBROT)
        .color_scheme("grayscale2")
        .max_steps(64)
        .samples(2)
        .escape_radius(5.0)
        .update_interval(50)
        .apply())
    st = api.service.settings
    assert (api.service.width, api.service.height) == (640, 360)
    assert st.algorithm == Algorithm.MANDELBROT
    assert st.color_scheme == ColorScheme.GRAYSCALE2
    assert (st.max_steps, st.samples, st.escape_radius, st.update_interval_ms) == (64, 2, 5.0, 50)


def test_builder_rejects_mismatched_scheme(api):
    with pytest.raises(SettingsError):
        api.configure().color_scheme(ColorScheme.HSV1).apply()
    assert api.service.settings.color_scheme == ColorScheme.NEWTON_COLORFUL


def test_builder_rejects_unknown_scheme_name(api):
    with pytest.raises(ValueError, match="Unknown color scheme"):
        RenderConfigBuilder(api.service).color_scheme("sepia")


def test_restore_renders_shared_state(api):
    frames = []
    api.on_frame(frames.append)
    state = ShareableState.from_dict({
        "zoom": "2,1.5",
        "lookAt": [0.0, 0.0],
        "iterations": 30,
        "escapeRadius": 6,
        "colorScheme": "NEWTON_GRAYSCALE",
    })
    session = api.restore(state)
    api.service.scheduler.run_until_idle()
    assert [f.seq for f in frames] == [session.id]
    assert api.state() == state


def test_from_dict_reports_missing_key():
    with pytest.raises(ValueError, match="lookAt"):
        ShareableState.from_dict({"zoom": [1, 1], "iterations": 1,
                                  "escapeRadius": 1, "colorScheme": "HSV1"})


def test_reset_restores_default_view(api):
    api.set_view((1.0, 2.0), (0.1, 0.1))
    session = api.reset()
    assert session.viewport.look_at == Viewport().look_at
    api.stop_render()
    assert not api.service.is_rendering()


def test_resolution_presets():
    from api.render_api import preset_size
    assert preset_size("1080p") == (1920, 1080)
    assert preset_size("720P") == (1280, 720)
    with pytest.raises(ValueError, match="preset"):
        preset_size("999p")
