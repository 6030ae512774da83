from __future__ import annotations

from pathlib import Path

import pytest

from harness.models import CompilersSpec, Operation, RunOutcome, RunRequest, Verdict


def test_compilers_spec_parse_star_means_all() -> None:
    spec = CompilersSpec.parse(" * ")
    assert spec.is_all
    assert str(spec) == "*"


def test_compilers_spec_parse_comma_list_strips_and_keeps_order() -> None:
    spec = CompilersSpec.parse("v0-7-0, v0-6-0,,v2023-01-17 ")
    assert not spec.is_all
    assert spec.names == ("v0-7-0", "v0-6-0", "v2023-01-17")
    assert str(spec) == "v0-7-0,v0-6-0,v2023-01-17"


@pytest.mark.parametrize("raw", ["", " ", ",", " , "])
def test_compilers_spec_parse_rejects_empty(raw: str) -> None:
    with pytest.raises(ValueError):
        CompilersSpec.parse(raw)


def test_verdict_descriptions() -> None:
    assert Verdict.ok().describe() == "OK"
    assert Verdict.mismatch("a", "b").describe() == "Mismatch"
    assert Verdict.error("compare compilation").describe() == "Error during compare compilation"


def test_run_outcome_exit_code_derives_from_verdicts() -> None:
    ok = RunOutcome(Operation.TEST, {"v0-6-0": Verdict.ok(), "v0-7-0": Verdict.ok()})
    assert ok.success and ok.exit_code == 0 and not ok.mismatches

    bad = RunOutcome(Operation.TEST, {"v0-6-0": Verdict.ok(), "v0-10-0": Verdict.error("test")})
    assert not bad.success and bad.exit_code == 1 and not bad.mismatches
    assert bad.longest_name_len == len("v0-10-0")

    mism = RunOutcome(Operation.TEST, {"v0-6-0": Verdict.mismatch("a", "b")})
    assert mism.mismatches and mism.exit_code == 1


def test_empty_run_succeeds() -> None:
    outcome = RunOutcome(Operation.GEN_REFS, {})
    assert outcome.success
    assert outcome.exit_code == 0
    assert outcome.longest_name_len == 0


def test_run_request_compiler_dir_is_under_run_dir(tmp_path: Path) -> None:
    req = RunRequest(
        operation=Operation.GEN_REFS,
        run_dir=tmp_path / "run",
        compilers=CompilersSpec.all(),
        sample=tmp_path / "sample.typ",
        ref_dir=tmp_path / "refs",
    )
    assert req.compiler_dir == tmp_path / "run" / "compilers"
    assert Operation.GEN_REFS.label == "reference generation"
    assert Operation.TEST.label == "test"
