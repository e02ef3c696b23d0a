"""
Tests for the variant selector — ordering, missing tasks, malformed entries.
"""

import pytest

from pkgscript.core.engine.selector import parse_task, select_variants
from pkgscript.core.errors import MalformedTask, TaskNotFound
from pkgscript.core.models.config import ScriptsConfig


def _config(**scripts) -> ScriptsConfig:
    return ScriptsConfig(scripts=scripts)


class TestSelectVariants:
    def test_preserves_declared_order(self, linux_facts):
        config = _config(build=[
            {"platform": "linux", "script": "A"},
            {"platform": "win32", "script": "B"},
            {"platform": "unix", "script": "C"},
        ])
        selected = select_variants(config, "build", linux_facts)
        assert [v.script for v in selected] == ["A", "C"]

    def test_empty_match_is_not_an_error(self, windows_facts):
        config = _config(build=[{"platform": "linux", "script": "echo hi"}])
        assert select_variants(config, "build", windows_facts) == []

    def test_undeclared_task(self, linux_facts):
        config = _config(build=[{"script": "make"}])
        with pytest.raises(TaskNotFound) as exc:
            select_variants(config, "deploy", linux_facts)
        assert exc.value.diagnostic() == "TaskNotFound: No script defined for deploy"

    def test_single_object_instead_of_list(self, linux_facts):
        config = _config(build={"script": "make"})
        with pytest.raises(MalformedTask, match="found object"):
            select_variants(config, "build", linux_facts)

    def test_other_tasks_unaffected_by_malformed_one(self, linux_facts):
        config = _config(broken="make", build=[{"script": "make"}])
        assert len(select_variants(config, "build", linux_facts)) == 1


class TestParseTask:
    def test_string_entry(self):
        with pytest.raises(MalformedTask, match="found string"):
            parse_task("build", "make")

    def test_empty_list(self):
        with pytest.raises(MalformedTask, match="declares no variants"):
            parse_task("build", [])

    def test_non_object_variant(self):
        with pytest.raises(MalformedTask, match="Variant 1 of build must be an object"):
            parse_task("build", [{"script": "a"}, "b"])

    def test_missing_script(self):
        with pytest.raises(MalformedTask, match="script"):
            parse_task("build", [{"platform": "linux"}])

    def test_empty_constraint_list(self):
        with pytest.raises(MalformedTask, match="must not be empty"):
            parse_task("build", [{"arch": [], "script": "a"}])

    def test_duplicate_constraint_tags(self):
        with pytest.raises(MalformedTask, match="duplicate"):
            parse_task("build", [{"platform": ["linux", "linux"], "script": "a"}])

    def test_wrong_constraint_type(self):
        with pytest.raises(MalformedTask, match="Variant 0 of build is invalid"):
            parse_task("build", [{"platform": 42, "script": "a"}])

    def test_diagnostic_is_one_line(self):
        with pytest.raises(MalformedTask) as exc:
            parse_task("build", [{"platform": 42, "arch": [], "shell": 1}])
        assert "\n" not in exc.value.diagnostic()
        assert exc.value.diagnostic().startswith("MalformedTask: ")

    def test_valid_variants(self):
        variants = parse_task("build", [
            {"platform": ["linux", "darwin"], "arch": "x64", "script": "make"},
            {"script": "echo done"},
        ])
        assert variants[0].platform == ["linux", "darwin"]
        assert variants[1].platform is None
