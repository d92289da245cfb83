"""Tests for the kinoresolve CLI entrypoint."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from kinoresolve.domain.entities.media import MediaKind, MediaRequest
from kinoresolve.domain.entities.stream import StreamVariant
from kinoresolve.domain.exceptions import (
    PlayerError,
    PlaylistError,
    ResolutionError,
    ResolutionErrorKind,
)
from kinoresolve.interfaces.cli import cli

VARIANTS = [
    StreamVariant(resolution="1920x1080", bandwidth="5000000", url="https://host/a/1080p/index.m3u8"),
    StreamVariant(resolution="1280x720", bandwidth="2500000", url="https://host/a/720p/index.m3u8"),
]


@pytest.fixture()
def container(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    fake = MagicMock()
    fake.use_case.execute.return_value = list(VARIANTS)
    monkeypatch.setattr(cli, "build_container", MagicMock(return_value=fake))
    monkeypatch.setattr(cli, "configure_logging", MagicMock())
    return fake


def _run(*argv: str) -> tuple[int, str]:
    out = io.StringIO()
    code = cli.start(list(argv), out=out)
    return code, out.getvalue()


class TestBuildRequest:
    def test_movie(self) -> None:
        args = cli._parse_args(["tt5950044"])
        assert cli.build_request(args) == MediaRequest.movie("tt5950044")

    def test_series(self) -> None:
        args = cli._parse_args(["tt0944947", "--season", "1", "--episode", "2"])
        req = cli.build_request(args)
        assert req.kind is MediaKind.SERIES
        assert (req.season, req.episode) == (1, 2)

    def test_season_without_episode_is_series(self) -> None:
        args = cli._parse_args(["tt0944947", "--season", "1"])
        req = cli.build_request(args)
        assert req.kind is MediaKind.SERIES
        assert req.episode == 0


class TestPrintVariants:
    def test_format(self) -> None:
        out = io.StringIO()
        cli.print_variants(VARIANTS, out)
        assert out.getvalue().splitlines() == [
            "[0] 1080p (5.0 Mbps) - https://host/a/1080p/index.m3u8",
            "[1] 720p (2.5 Mbps) - https://host/a/720p/index.m3u8",
        ]


class TestStart:
    def test_lists_variants(self, container: MagicMock) -> None:
        code, output = _run("tt5950044")
        assert code == cli.EXIT_OK
        assert "[0] 1080p (5.0 Mbps)" in output
        container.use_case.execute.assert_called_once_with(MediaRequest.movie("tt5950044"))
        container.close.assert_called_once()
        container.player.play.assert_not_called()

    def test_play_selected_variant(self, container: MagicMock) -> None:
        code, _ = _run("tt5950044", "--play", "--variant", "1")
        assert code == cli.EXIT_OK
        container.player.play.assert_called_once_with("https://host/a/720p/index.m3u8")

    def test_play_defaults_to_first(self, container: MagicMock) -> None:
        _run("tt5950044", "--play")
        container.player.play.assert_called_once_with("https://host/a/1080p/index.m3u8")

    def test_variant_out_of_range(self, container: MagicMock) -> None:
        code, _ = _run("tt5950044", "--play", "--variant", "5")
        assert code == cli.EXIT_FAILED
        container.player.play.assert_not_called()

    def test_undecodable_exit_code(self, container: MagicMock) -> None:
        container.use_case.execute.side_effect = ResolutionError(
            ResolutionErrorKind.UNDECODABLE, "no decoder produced a valid https URL"
        )
        code, output = _run("tt5950044")
        assert code == cli.EXIT_UNDECODABLE
        assert output == ""
        container.close.assert_called_once()

    @pytest.mark.parametrize(
        "kind",
        [
            ResolutionErrorKind.FETCH,
            ResolutionErrorKind.EXTRACTION,
            ResolutionErrorKind.NO_VIABLE_URL,
            ResolutionErrorKind.VALIDATION,
        ],
    )
    def test_other_resolution_failures(self, container: MagicMock, kind: ResolutionErrorKind) -> None:
        container.use_case.execute.side_effect = ResolutionError(kind, "failed")
        code, _ = _run("tt5950044")
        assert code == cli.EXIT_FAILED

    def test_playlist_failure(self, container: MagicMock) -> None:
        container.use_case.execute.side_effect = PlaylistError("https://h/m.m3u8", "empty")
        code, _ = _run("tt5950044")
        assert code == cli.EXIT_FAILED

    def test_player_failure(self, container: MagicMock) -> None:
        container.player.play.side_effect = PlayerError("mpv not found in PATH")
        code, _ = _run("tt5950044", "--play")
        assert code == cli.EXIT_PLAYER

    def test_cli_overrides_reach_config(self, container: MagicMock, tmp_path: Path) -> None:
        _run("tt5950044", "--diagnostics-dir", str(tmp_path / "dumps"), "--log-level", "DEBUG")
        config = cli.build_container.call_args.args[0]
        assert config.diagnostics_dir == tmp_path / "dumps"
        assert config.log_level == "DEBUG"
