from factories import finding, make_file

from scanfix.services.correction_cache import CorrectionCache


class CountingSynth:
    def __init__(self):
        self.calls = 0

    def __call__(self, file):
        from scanfix.repair.synthesizer import synthesize

        self.calls += 1
        return synthesize(file)


def test_computes_once_then_returns_stored_value():
    synth = CountingSynth()
    cache = CorrectionCache(synthesizer=synth)
    file = make_file(findings=[finding("eval", lines=(1,))])

    first = cache.get_or_compute(file)
    second = cache.get_or_compute(file)

    assert first is second
    assert synth.calls == 1
    assert "app.py" in cache
    assert len(cache) == 1


def test_none_results_are_not_stored():
    synth = CountingSynth()
    cache = CorrectionCache(synthesizer=synth)
    file = make_file()

    assert cache.get_or_compute(file) is None
    assert cache.get_or_compute(file) is None
    assert synth.calls == 2
    assert len(cache) == 0


def test_basename_collision_shares_entry():
    cache = CorrectionCache()
    a = make_file(file_path="a\\b\\c/d/file.py", findings=[finding("eval", lines=(1,))])
    b = make_file(file_path="x/y/file.py", findings=[finding("hardcoded", lines=(2,))])

    first = cache.get_or_compute(a)
    second = cache.get_or_compute(b)

    assert a.file_name == b.file_name == "file.py"
    assert second is first
    assert second.applied_lines == (1,)


def test_clear_empties_everything():
    cache = CorrectionCache()
    cache.get_or_compute(make_file(file_path="one.py", findings=[finding("eval", lines=(1,))]))
    cache.get_or_compute(make_file(file_path="two.py", findings=[finding("eval", lines=(1,))]))
    assert len(cache) == 2

    cache.clear()

    assert len(cache) == 0
    assert cache.get("one.py") is None
