"""Tests for package bucket computation."""

from licenses.closure import append_packages, collect_all, compute_required_closure, sort_bucket
from package.models import Package, Repository


def pkg(name, requires=(), dev_requires=(), license=None, version="1.0.0"):
    return Package(
        name=name,
        version=version,
        requires={r: "*" for r in requires},
        dev_requires={r: "*" for r in dev_requires},
        license=list(license or []),
    )


class TestRequiredClosure:
    """Transitive non-dev requirement closure."""

    def test_chain(self):
        repo = Repository([pkg("b", requires=["c"]), pkg("c"), pkg("unrelated")])
        root = pkg("a", requires=["b"])

        bucket = compute_required_closure(repo, root)

        assert set(bucket) == {"b", "c"}

    def test_dev_requirements_are_ignored(self):
        repo = Repository([pkg("b"), pkg("phpunit", requires=["c"]), pkg("c")])
        root = pkg("a", requires=["b"], dev_requires=["phpunit"])

        bucket = compute_required_closure(repo, root)

        assert set(bucket) == {"b"}

    def test_dev_requirements_of_dependencies_are_ignored(self):
        repo = Repository([pkg("b", dev_requires=["c"]), pkg("c")])
        root = pkg("a", requires=["b"])

        assert set(compute_required_closure(repo, root)) == {"b"}

    def test_cycle_terminates(self):
        repo = Repository([pkg("b", requires=["c"]), pkg("c", requires=["b"])])
        root = pkg("a", requires=["b"])

        bucket = compute_required_closure(repo, root)

        assert set(bucket) == {"b", "c"}

    def test_self_reference_is_noop(self):
        repo = Repository([pkg("b", requires=["b"])])
        root = pkg("a", requires=["b"])

        assert set(compute_required_closure(repo, root)) == {"b"}

    def test_missing_requirement_is_skipped(self):
        repo = Repository([pkg("b")])
        root = pkg("a", requires=["b", "php", "ext-json", "ghost"])

        assert set(compute_required_closure(repo, root)) == {"b"}

    def test_no_requirements(self):
        repo = Repository([pkg("b"), pkg("c")])
        assert compute_required_closure(repo, pkg("a")) == {}

    def test_diamond(self):
        repo = Repository([
            pkg("b", requires=["d"]),
            pkg("c", requires=["d"]),
            pkg("d", requires=["e"]),
            pkg("e"),
        ])
        root = pkg("a", requires=["b", "c"])

        assert set(compute_required_closure(repo, root)) == {"b", "c", "d", "e"}

    def test_idempotent(self):
        repo = Repository([pkg("b", requires=["c"]), pkg("c", requires=["b"]), pkg("d")])
        root = pkg("a", requires=["c"])

        first = compute_required_closure(repo, root)
        second = compute_required_closure(repo, root)

        assert first == second

    def test_only_reachable_packages(self):
        packages = [pkg("b", requires=["c"]), pkg("c"), pkg("x", requires=["b"]), pkg("y")]
        repo = Repository(packages)
        root = pkg("a", requires=["b"])

        bucket = compute_required_closure(repo, root)

        assert "x" not in bucket and "y" not in bucket
        for name, found in bucket.items():
            assert found.name == name

    def test_duplicate_names_last_wins(self):
        old = pkg("b", version="1.0.0")
        new = pkg("b", version="2.0.0")
        repo = Repository([old, new])

        bucket = compute_required_closure(repo, pkg("a", requires=["b"]))

        assert bucket["b"] is new


class TestCollectAll:
    """Unfiltered collection of installed packages."""

    def test_collects_everything(self):
        repo = Repository([pkg("b"), pkg("c", dev_requires=["d"]), pkg("d")])
        assert set(collect_all(repo)) == {"b", "c", "d"}

    def test_last_write_wins(self):
        first = pkg("b", version="1.0.0")
        second = pkg("b", version="2.0.0")
        bucket = collect_all(Repository([first, second]))
        assert bucket == {"b": second}

    def test_empty_repository(self):
        assert collect_all(Repository()) == {}


def test_append_packages_overwrites():
    bucket = {"b": pkg("b", version="1.0.0")}
    replacement = pkg("b", version="3.0.0")
    result = append_packages([replacement, pkg("c")], bucket)
    assert result is bucket
    assert bucket["b"] is replacement
    assert set(bucket) == {"b", "c"}


def test_sort_bucket_by_name():
    bucket = {name: pkg(name) for name in ["zeta", "alpha", "Beta", "gamma"]}
    assert [p.name for p in sort_bucket(bucket)] == ["Beta", "alpha", "gamma", "zeta"]
