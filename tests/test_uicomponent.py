import pytest

from snowsedit.terminal import Size
from snowsedit.uicomponent import UIComponent


class Box(UIComponent):
    def __init__(self, fail=False):
        super().__init__()
        self.fail = fail
        self.drawn_at = []

    def draw(self, terminal, origin_y):
        if self.fail:
            raise OSError("cannot write")
        self.drawn_at.append(origin_y)


def test_starts_clean_with_empty_size():
    box = Box()
    assert box.needs_redraw is False
    assert box.size == Size()


def test_resize_stores_size_and_marks_dirty():
    box = Box()
    box.resize(Size(height=3, width=9))
    assert box.size == Size(height=3, width=9)
    assert box.needs_redraw is True


def test_render_draws_once_when_dirty():
    box = Box()
    UIComponent.resize(box, Size(height=1, width=5))
    UIComponent.render(box, None, 4)
    UIComponent.render(box, None, 4)
    assert box.drawn_at == [4]
    assert box.needs_redraw is False


def test_render_skips_clean_component():
    box = Box()
    UIComponent.render(box, None, 0)
    assert box.drawn_at == []
    assert box.needs_redraw is False


def test_failed_draw_keeps_component_dirty():
    box = Box(fail=True)
    UIComponent.resize(box, Size(height=1, width=5))
    UIComponent.render(box, None, 0)
    assert box.needs_redraw is True
    assert box.drawn_at == []


def test_base_class_cannot_be_instantiated():
    with pytest.raises(TypeError):
        UIComponent()