from fakes import module
from reactorscan.aggregation import aggregate, aggregate_project_name, flatten
from reactorscan.model import (
    AggregationStrategy,
    Coordinates,
    DependencyRecord,
    ModuleError,
    ProjectRecord,
)


def _rec(artifact_id: str, *children: DependencyRecord) -> DependencyRecord:
    return DependencyRecord(
        coordinates=Coordinates("org.example", artifact_id, "1.0"),
        scope="compile",
        children=children,
    )


def _project(artifact_id: str, *deps: DependencyRecord) -> ProjectRecord:
    return ProjectRecord(
        coordinates=Coordinates("org.example", artifact_id, "1.0"), dependencies=deps
    )


def test_flatten_is_preorder_and_keeps_duplicates() -> None:
    tree = [_rec("a", _rec("b", _rec("c")), _rec("d")), _rec("b")]

    flat = flatten(tree)

    assert [r.artifact_id for r in flat] == ["a", "b", "c", "d", "b"]
    assert all(r.children == () for r in flat)


def test_flatten_is_idempotent() -> None:
    flat = flatten([_rec("a", _rec("b", _rec("c"))), _rec("d")])

    assert flatten(flat) == flat


def test_flatten_does_not_touch_input() -> None:
    tree = _rec("a", _rec("b"))

    flatten([tree])

    assert [c.artifact_id for c in tree.children] == ["b"]


def test_flatten_handles_deep_chains() -> None:
    record = _rec("leaf")
    for i in range(5000):
        record = _rec(f"n{i}", record)

    assert len(flatten([record])) == 5001


def test_none_strategy_returns_records_unchanged() -> None:
    projects = [_project("a", _rec("x")), _project("b")]
    errors = [ModuleError(Coordinates("g", "c", "1"), "boom")]

    inventory = aggregate(projects, AggregationStrategy.NONE, module("a"), errors=errors)

    assert inventory.projects == tuple(projects)
    assert inventory.errors == tuple(errors)
    assert not inventory.is_aggregated


def test_flat_aggregation_of_two_modules() -> None:
    projects = [_project("a", _rec("x")), _project("b", _rec("x", _rec("z")))]

    inventory = aggregate(projects, AggregationStrategy.FLAT, module("a", version="2.0"))

    [synthetic] = inventory.projects
    assert [d.artifact_id for d in synthetic.dependencies] == ["x", "x", "z"]
    assert synthetic.coordinates.artifact_id == "a-2.0"
    assert synthetic.token is None


def test_preserve_modules_keeps_one_level_of_hierarchy() -> None:
    projects = [_project("a", _rec("x", _rec("y"))), _project("b", _rec("z"))]

    inventory = aggregate(
        projects,
        AggregationStrategy.PRESERVE_MODULES,
        module("a"),
        name="all-modules",
        packaging={Coordinates("org.example", "a", "1.0"): "war"},
    )

    [synthetic] = inventory.projects
    assert synthetic.coordinates.artifact_id == "all-modules"
    modules = synthetic.dependencies
    assert [m.artifact_id for m in modules] == ["a", "b"]
    assert modules[0].extension == "war"
    assert modules[1].extension is None
    assert [c.artifact_id for c in modules[0].children] == ["x"]
    assert [c.artifact_id for c in modules[0].children[0].children] == ["y"]


def test_aggregate_naming_tie_break() -> None:
    root = module("root", version="3.1")

    assert aggregate_project_name(root, "explicit", "tok") == "explicit"
    assert aggregate_project_name(root, None, "tok") is None
    assert aggregate_project_name(root) == "root-3.1"
    assert aggregate_project_name(None) is None


def test_aggregate_token_is_carried() -> None:
    inventory = aggregate(
        [_project("a", _rec("x"))], AggregationStrategy.FLAT, module("a"), token="agg-token"
    )

    [synthetic] = inventory.projects
    assert synthetic.token == "agg-token"
    assert synthetic.coordinates.artifact_id is None
