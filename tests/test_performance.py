import pytest

from agentic.performance import (
    AnimationSystem,
    EasingFunction,
    OptimizedTextRenderer,
    PerformanceManager,
    VirtualScroller,
)


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_frame_limiting():
    clock = FakeClock()
    manager = PerformanceManager(clock=clock)
    clock.now = 0.010
    assert manager.should_render_frame() is False
    clock.now = 0.020
    assert manager.should_render_frame() is True
    assert manager.last_frame_time == clock.now
    assert manager.should_render_frame() is False


def test_dirty_regions_sorted_by_priority():
    manager = PerformanceManager()
    priorities = [1, 5, 3, 5, 0]
    for index, priority in enumerate(priorities):
        manager.mark_dirty(index, 0, 1, 1, priority)
    assert [r.priority for r in manager.dirty_regions] == sorted(priorities, reverse=True)
    top = [r.x for r in manager.dirty_regions if r.priority == 5]
    assert top == [1, 3]
    manager.clear_dirty_regions()
    assert manager.dirty_regions == []


def test_optimize_command_history_truncates_in_place():
    manager = PerformanceManager(max_history_size=3)
    history = ["a", "b", "c", "d", "e"]
    manager.optimize_command_history(history)
    assert history == ["a", "b", "c"]
    short = ["x"]
    manager.optimize_command_history(short)
    assert short == ["x"]


def test_optimize_command_output():
    manager = PerformanceManager(max_output_lines=3)
    lines = [f"line {n}" for n in range(7)]
    text = "\n".join(lines)
    result = manager.optimize_command_output(text)
    kept, note = result.split("\n\n")
    assert kept == "\n".join(lines[:3])
    assert note == f"... {len(lines) - 3} more lines truncated for performance"
    assert manager.optimize_command_output("one\ntwo\n") == "one\ntwo\n"


def test_scroller_scroll_down_is_clamped():
    scroller = VirtualScroller(viewport_height=10, item_height=4)
    scroller.update_total_items(9)
    scroller.scroll_down(100)
    assert scroller.scroll_offset == scroller.max_scroll_offset()
    assert scroller.visible_range()[1] == 9
    scroller.scroll_up(100)
    assert scroller.scroll_offset == 0
    assert scroller.visible_range()[0] == 0


def test_scroller_range_never_exceeds_total():
    scroller = VirtualScroller(viewport_height=100, item_height=4)
    scroller.update_total_items(3)
    assert scroller.visible_range() == (0, 3)
    assert scroller.max_scroll_offset() == 0


def test_scroll_to_item_makes_it_visible():
    scroller = VirtualScroller(viewport_height=10, item_height=4)
    scroller.update_total_items(20)
    for item in (19, 0, 7):
        scroller.scroll_to_item(item)
        start, end = scroller.visible_range()
        assert start <= item < end


def test_update_total_items_clamps_offset():
    scroller = VirtualScroller(viewport_height=10, item_height=4)
    scroller.update_total_items(20)
    scroller.scroll_down(15)
    scroller.update_total_items(4)
    assert scroller.scroll_offset == scroller.max_scroll_offset()


def test_scroller_rejects_zero_item_height():
    with pytest.raises(ValueError):
        VirtualScroller(viewport_height=10, item_height=0)


def test_easing_endpoints():
    assert EasingFunction.LINEAR.apply(0.0) == pytest.approx(0.0)
    assert EasingFunction.LINEAR.apply(1.0) == pytest.approx(1.0)
    assert EasingFunction.EASE_IN.apply(0.0) == pytest.approx(0.0)
    assert EasingFunction.EASE_IN.apply(1.0) == pytest.approx(1.0)
    assert EasingFunction.EASE_OUT.apply(0.0) == pytest.approx(0.0)
    assert EasingFunction.EASE_OUT.apply(1.0) == pytest.approx(1.0)
    assert EasingFunction.EASE_IN_OUT.apply(0.0) == pytest.approx(0.0)
    assert EasingFunction.EASE_IN_OUT.apply(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("progress", [0.1, 0.3, 0.7, 0.9])
def test_easing_shapes(progress):
    assert EasingFunction.LINEAR.apply(progress) == progress
    assert EasingFunction.EASE_IN.apply(progress) < progress
    assert EasingFunction.EASE_OUT.apply(progress) > progress


def test_ease_in_out_midpoint():
    assert EasingFunction.EASE_IN_OUT.apply(0.5) == pytest.approx(0.5)


def test_animation_progress_and_completion():
    clock = FakeClock()
    system = AnimationSystem(clock=clock)
    system.start_animation("fade", 1.0, 0.0, 10.0, EasingFunction.LINEAR)
    assert system.get_value("fade") == 0.0
    clock.now = 0.5
    assert system.update() is True
    assert system.get_value("fade") == pytest.approx(5.0)
    clock.now = 2.0
    assert system.update() is False
    assert system.get_value("fade") is None


def test_restart_replaces_animation():
    clock = FakeClock()
    system = AnimationSystem(clock=clock)
    system.start_animation("slide", 1.0, 0.0, 1.0, EasingFunction.EASE_IN)
    system.start_animation("slide", 2.0, 4.0, 8.0, EasingFunction.EASE_OUT)
    assert len(system.animations) == 1
    assert system.get_value("slide") == 4.0
    clock.now = 1.0
    system.update()
    assert 4.0 < system.get_value("slide") < 8.0


def test_highlight_rust_keywords():
    renderer = OptimizedTextRenderer()
    lines = renderer.render_with_highlighting("let x = 1;\nreturn", "rust")
    assert lines[0].startswith("\x1b[94mlet\x1b[0m")
    assert lines[1] == "return"


def test_highlight_shell_commands():
    renderer = OptimizedTextRenderer()
    lines = renderer.render_with_highlighting("  git status\necho hi", "bash")
    assert lines == ["\x1b[92m  git status\x1b[0m", "echo hi"]
    assert renderer.render_with_highlighting("ls", "shell") == ["\x1b[92mls\x1b[0m"]


def test_highlight_json_colons():
    renderer = OptimizedTextRenderer()
    [line] = renderer.render_with_highlighting('{"a": 1}', "json")
    assert line == '{"a"\x1b[93m:\x1b[0m 1}'


def test_unknown_language_returns_lines():
    renderer = OptimizedTextRenderer()
    assert renderer.render_with_highlighting("a\r\nb\n", None) == ["a", "b"]


def test_cache_drops_oldest():
    renderer = OptimizedTextRenderer(max_cache_size=2)
    for line in ("a", "b", "c"):
        renderer.cache_line(line)
    assert list(renderer.line_cache) == ["b", "c"]