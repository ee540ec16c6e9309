from pathlib import Path

from reactorscan.cli import _build_parser, _override_fields, main


def test_skip_exits_cleanly(tmp_path: Path) -> None:
    assert main([str(tmp_path), "--skip"]) == 0


def test_conflicting_aggregation_exits_with_error(tmp_path: Path) -> None:
    argv = [str(tmp_path), "--aggregate-modules", "--preserve-module-info"]

    assert main(argv) == 1
    assert main([*argv, "--no-fail-on-error"]) == 0


def test_invalid_config_file_exits_with_error(tmp_path: Path) -> None:
    (tmp_path / ".reactorscan.toml").write_text("[reactorscan]\nskip = 'yes'\n")

    assert main([str(tmp_path)]) == 1


def test_update_empty_project_flag_is_negatable() -> None:
    parser = _build_parser()

    assert _override_fields(parser.parse_args(["."]))["update_empty_project"] is None
    assert _override_fields(parser.parse_args([".", "--update-empty-project"]))[
        "update_empty_project"
    ]
    assert (
        _override_fields(parser.parse_args([".", "--no-update-empty-project"]))[
            "update_empty_project"
        ]
        is False
    )
