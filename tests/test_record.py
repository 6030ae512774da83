import json
import logging
import tempfile
import unittest
from pathlib import Path

from harness.compilers import Compiler
from harness.models import Operation, RunOutcome, Verdict
from harness.record import SCHEMA_VERSION, build_summary, summary_path, write_run_summary


class TestRunSummary(unittest.TestCase):
    def _fixture(self, root: Path):
        compilers = [
            Compiler.create("v0-6-0", root / "compilers" / "v0-6-0", root / "refs", root / "cmps"),
            Compiler.create("v0-7-0", root / "compilers" / "v0-7-0", root / "refs", root / "cmps"),
        ]
        outcome = RunOutcome(
            Operation.TEST,
            {"v0-6-0": Verdict.ok(), "v0-7-0": Verdict.mismatch("aa", "bb")},
            cmp_dir=root / "cmps",
        )
        return compilers, outcome

    def test_build_summary_shape(self) -> None:
        root = Path("/run")
        compilers, outcome = self._fixture(root)

        data = build_summary(
            outcome,
            compilers,
            versions={"v0-6-0": "typst 0.6.0", "v0-7-0": None},
            started="t0",
            finished="t1",
        )

        self.assertEqual(SCHEMA_VERSION, data["schema_version"])
        self.assertEqual("test", data["operation"])
        self.assertFalse(data["success"])
        self.assertEqual(1, data["exit_code"])
        self.assertEqual(str(root / "cmps"), data["cmp_dir"])
        self.assertEqual(["v0-6-0", "v0-7-0"], [c["name"] for c in data["compilers"]])

        first, second = data["compilers"]
        self.assertEqual("ok", first["status"])
        self.assertEqual("typst 0.6.0", first["reported_version"])
        self.assertEqual("subcommand-after-root", first["arg_layout"])
        self.assertEqual("mismatch", second["status"])
        self.assertEqual(("aa", "bb"), (second["ref_digest"], second["cmp_digest"]))
        self.assertIsNone(second["reported_version"])

    def test_write_run_summary_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            compilers, outcome = self._fixture(root)

            path = write_run_summary(root, outcome, compilers, versions={}, started="t0", finished="t1")

            self.assertEqual(summary_path(root, outcome), path)
            self.assertEqual(root / "test-results.json", path)
            self.assertEqual("t1", json.loads(path.read_text(encoding="utf-8"))["finished"])
            self.assertEqual([], list(root.glob("*.tmp")))

    def test_write_failure_is_logged_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            blocker = root / "blocker"
            blocker.write_text("")
            compilers, outcome = self._fixture(root)

            with self.assertLogs("harness.record", level=logging.WARNING):
                path = write_run_summary(
                    blocker / "run", outcome, compilers, versions={}, started="t0", finished="t1"
                )
            self.assertIsNone(path)

    def test_unencodable_name_is_logged_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            outcome = RunOutcome(Operation.GEN_REFS, {"v0-8-0\udcff": Verdict.ok()})

            with self.assertLogs("harness.record", level=logging.WARNING):
                path = write_run_summary(root, outcome, [], versions={}, started="t0", finished="t1")
            self.assertIsNone(path)
            self.assertEqual([], list(root.glob("*.tmp")))


if __name__ == "__main__":
    unittest.main()
