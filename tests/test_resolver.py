"""Tests for module root resolution."""

import itertools

import pytest

from core.domain.models import ModuleInfo
from core.errors import ProbeError, ResolutionExhausted
from core.services.resolver import resolve


def probe_for(*roots):
    """Probe sintético que solo acepta los paths de `roots`."""
    calls = []

    def _probe(path, version):
        calls.append((path, version))
        if path in roots:
            return ModuleInfo(path=path, version=version)
        raise ProbeError(f"{path}@{version}: not a module")

    _probe.calls = calls
    return _probe


PATHS = [
    "example.com",
    "example.com/a",
    "example.com/a/b/cmd/d",
    "github.com/go-delve/delve/cmd/dlv",
    "golang.org/x/tools/gopls/internal/x/y/z",
]


class TestResolve:
    """Tests for resolve()."""

    def test_module_nested_command(self):
        probe = probe_for("example.com/a/b")
        location = resolve("example.com/a/b/cmd/d", "latest", probe)
        assert location.root == "example.com/a/b"
        assert location.tail == "cmd/d"
        assert location.module.path == "example.com/a/b"
        assert probe.calls == [
            ("example.com/a/b/cmd/d", "latest"),
            ("example.com/a/b/cmd", "latest"),
            ("example.com/a/b", "latest"),
        ]

    def test_first_probe_success_has_empty_tail(self):
        probe = probe_for("example.com/gopl")
        location = resolve("example.com/gopl", "v1.2.0", probe)
        assert location.root == "example.com/gopl"
        assert location.tail == ""
        assert len(probe.calls) == 1

    def test_deepest_root_wins(self):
        probe = probe_for("example.com/a", "example.com/a/b")
        location = resolve("example.com/a/b/c", "latest", probe)
        assert (location.root, location.tail) == ("example.com/a/b", "c")

    @pytest.mark.parametrize("path", PATHS)
    def test_always_failing_probe_exhausts_after_depth_attempts(self, path):
        probe = probe_for()
        with pytest.raises(ResolutionExhausted) as excinfo:
            resolve(path, "latest", probe)

        depth = len(path.split("/"))
        assert len(probe.calls) == depth
        assert excinfo.value.attempts == depth
        assert excinfo.value.path == path
        assert isinstance(excinfo.value.__cause__, ProbeError)
        assert excinfo.value.last_error is excinfo.value.__cause__
        assert probe.calls[-1][0] == path.split("/")[0]

    def test_single_segment_gets_one_probe(self):
        probe = probe_for()
        with pytest.raises(ResolutionExhausted):
            resolve("example.com", "latest", probe)
        assert probe.calls == [("example.com", "latest")]

    def test_other_probe_errors_propagate(self):
        def broken(path, version):
            raise RuntimeError("toolchain exploded")

        with pytest.raises(RuntimeError):
            resolve("example.com/a/b", "latest", broken)


class TestTailInvariant:
    """Joining root and tail rebuilds the input path at every iteration."""

    @pytest.mark.parametrize(
        "path,accept_depth",
        [
            (path, depth)
            for path in PATHS
            for depth in itertools.chain([None], range(1, len(path.split("/")) + 1))
        ],
    )
    def test_invariant_holds_for_every_attempt(self, path, accept_depth):
        segments = path.split("/")
        roots = () if accept_depth is None else ("/".join(segments[:accept_depth]),)
        probe = probe_for(*roots)
        attempts = []

        try:
            location = resolve(path, "latest", probe, on_attempt=attempts.append)
        except ResolutionExhausted:
            location = None

        assert attempts, "on_attempt must be called before the first probe"
        assert [a.root for a in attempts] == [call[0] for call in probe.calls]
        for previous, current in zip(attempts, attempts[1:]):
            assert len(current.root.split("/")) == len(previous.root.split("/")) - 1
        for attempt in attempts:
            assert attempt.joined == path
            assert path.startswith(attempt.root)

        if location is not None:
            assert location.joined == path
            assert location.root == roots[0]
            assert len(attempts) == len(segments) - accept_depth + 1
        else:
            assert accept_depth is None
            assert len(attempts) == len(segments)
