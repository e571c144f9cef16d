from __future__ import annotations

import numpy as np
import pytest

from engine.render.surface import PixelSurface, SurfaceError


def test_bind_sizes_buffer_to_window(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(4, 2), presenter)
    assert surface.size == (4, 2)
    with surface.buffer_mut() as view:
        assert len(view) == 8
        assert view.pixels.shape == (8,)
        assert view.pixels.dtype == np.uint32


def test_bind_to_zero_sized_window_has_no_buffer(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(0, 3), presenter)
    assert surface.size == (0, 0)
    with pytest.raises(SurfaceError):
        surface.acquire_buffer()


def test_resize_twice_to_same_size_keeps_buffer(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(4, 2), presenter)
    surface.resize(6, 3)
    view = surface.acquire_buffer()
    first = view.pixels
    view.present()
    surface.resize(6, 3)
    assert surface.size == (6, 3)
    view = surface.acquire_buffer()
    assert view.pixels is first
    view.present()


@pytest.mark.parametrize("size", [(0, 5), (5, 0), (0, 0), (-1, 3)])
def test_resize_rejects_non_positive_dimensions(make_window, presenter, size) -> None:
    surface = PixelSurface.bind(make_window(4, 2), presenter)
    with pytest.raises(SurfaceError):
        surface.resize(*size)
    assert surface.size == (4, 2)


def test_present_commits_and_releases_view(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(2, 2), presenter)
    view = surface.acquire_buffer()
    view.pixels[:] = np.arange(4, dtype=np.uint32)
    view.present()
    assert view.released
    assert not surface.acquired
    assert surface.present_count == 1
    w, h, frame = presenter.frames[0]
    assert (w, h) == (2, 2)
    np.testing.assert_array_equal(frame, np.arange(4, dtype=np.uint32))
    with pytest.raises(SurfaceError):
        _ = view.pixels
    with pytest.raises(SurfaceError):
        view.present()


def test_only_one_view_at_a_time(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(2, 2), presenter)
    view = surface.acquire_buffer()
    with pytest.raises(SurfaceError):
        surface.acquire_buffer()
    with pytest.raises(SurfaceError):
        surface.resize(3, 3)
    view.present()
    surface.acquire_buffer().present()
    assert surface.present_count == 2


def test_buffer_mut_presents_even_when_drawing_fails(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(2, 2), presenter)
    with pytest.raises(ZeroDivisionError):
        with surface.buffer_mut() as view:
            view.pixels[0] = 1
            1 / 0
    assert view.released
    assert not surface.acquired
    assert len(presenter.frames) == 1
    # 次のディスパッチで再取得できる
    with surface.buffer_mut():
        pass
    assert len(presenter.frames) == 2


def test_buffer_mut_allows_explicit_present(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(2, 2), presenter)
    with surface.buffer_mut() as view:
        view.present()
    assert len(presenter.frames) == 1


def test_presenter_failure_is_fatal_surface_error(make_window, presenter) -> None:
    surface = PixelSurface.bind(make_window(2, 2), presenter)
    presenter.fail_with = OSError("device lost")
    with pytest.raises(SurfaceError) as ei:
        with surface.buffer_mut():
            pass
    assert isinstance(ei.value.__cause__, OSError)
    assert not surface.acquired
