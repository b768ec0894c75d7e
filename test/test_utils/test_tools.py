"""Tests for the shared utilities."""

import time
import types

import pytest

from cosmictag.post.cosmic import CosmicPCAxisProcessor
from cosmictag.utils.enums import CosmicTagEnum, cosmic_score
from cosmictag.utils.factory import instantiate, module_dict
from cosmictag.utils.stopwatch import StopwatchManager


class Dummy:
    """Dummy class to instantiate."""

    name = "dummy"
    aliases = ("old_dummy",)

    def __init__(self, value=0, scale=1):
        self.value = value
        self.scale = scale


class TestFactory:
    """Test the class factory tools."""

    def test_module_dict(self):
        """Classes are registered under their name, `name` and aliases."""
        module = types.ModuleType(Dummy.__module__)
        module.Dummy = Dummy
        classes = module_dict(module)

        assert classes["Dummy"] is Dummy
        assert classes["dummy"] is Dummy
        assert classes["old_dummy"] is Dummy

    def test_instantiate(self):
        """Test instantiation from a configuration block."""
        obj = instantiate({"dummy": Dummy}, {"name": "dummy", "value": 3}, scale=2)
        assert obj.value == 3 and obj.scale == 2

    def test_instantiate_kwargs(self):
        """Keyword arguments can be nested under `kwargs`."""
        obj = instantiate({"dummy": Dummy}, {"name": "dummy", "kwargs": {"value": 4}})
        assert obj.value == 4

    def test_instantiate_string(self):
        """A bare string is the name of a class without parameters."""
        assert instantiate({"dummy": Dummy}, "dummy").value == 0

    def test_unknown_name(self):
        """Unknown names raise a ValueError."""
        with pytest.raises(ValueError):
            instantiate({"dummy": Dummy}, {"name": "other"})

    def test_bad_arguments(self):
        """Instantiation errors are propagated."""
        with pytest.raises(TypeError):
            instantiate({"dummy": Dummy}, {"name": "dummy", "unknown": 1})

    def test_post_processor_alias(self):
        """Post-processors are found under their aliases."""
        from cosmictag.post.factories import POST_DICT

        assert POST_DICT["cosmic_pca_tagger"] is CosmicPCAxisProcessor
        assert POST_DICT["pca_cosmic_tagger"] is CosmicPCAxisProcessor


class TestEnums:
    """Test the enumerated types."""

    def test_codes(self):
        """Test that the category codes are the standard ones."""
        assert CosmicTagEnum.NOT_TAGGED == 0
        assert CosmicTagEnum.GEOMETRY_YY == 1
        assert CosmicTagEnum.GEOMETRY_ZZ == 3
        assert CosmicTagEnum.GEOMETRY_XX == 4
        assert CosmicTagEnum.GEOMETRY_Y == 21
        assert CosmicTagEnum.GEOMETRY_X == 23
        assert CosmicTagEnum.OUTSIDE_DRIFT_PARTIAL == 100

    def test_scores(self):
        """Test the score of each family of categories."""
        assert cosmic_score(CosmicTagEnum.NOT_TAGGED) == 0.0
        assert cosmic_score(CosmicTagEnum.GEOMETRY_ZZ) == 0.4
        for tag_id in ("GEOMETRY_X", "GEOMETRY_Y", "GEOMETRY_Z"):
            assert cosmic_score(CosmicTagEnum[tag_id]) == 0.5
        for tag_id in ("GEOMETRY_XX", "GEOMETRY_YY", "GEOMETRY_XY", "GEOMETRY_XZ"):
            assert cosmic_score(CosmicTagEnum[tag_id]) == 1.0
        assert cosmic_score(100) == 1.0


class TestStopwatch:
    """Test the stopwatch manager."""

    def test_time(self):
        """Test that the elapsed time is recorded and summed."""
        watch = StopwatchManager()
        watch.initialize(["a", "b"])
        for _ in range(2):
            watch.start("a")
            time.sleep(0.01)
            watch.stop("a")

        assert watch.time("a").wall > 0.0
        assert watch.time_sum("a").wall >= 2 * 0.009
        assert set(watch.keys()) == {"a", "b"}

    def test_misuse(self):
        """Test that inconsistent calls raise."""
        watch = StopwatchManager()
        watch.initialize("a")
        with pytest.raises(ValueError):
            watch.stop("a")
        watch.start("a")
        with pytest.raises(ValueError):
            watch.start("a")
        with pytest.raises(KeyError):
            watch.start("b")

    def test_update(self):
        """Test the merging of another manager."""
        watch, other = StopwatchManager(), StopwatchManager()
        other.initialize("tagger")
        watch.update(other, "post")

        assert "post_tagger" in watch.keys()
