"""Tests for the stability-image command."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from stability_ai import cli
from stability_ai.exceptions import TransportError
from stability_ai.params import FileRef

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def mock_client():
    """Patch the client used by the CLI."""
    with patch.object(cli, "StabilityClient") as mock_cls:
        yield mock_cls.return_value


class TestMain:
    """Tests for cli.main."""

    def test_core_generation_saves_image(
        self, mock_client, tmp_path: Path, sample_image_bytes: bytes, capsys
    ) -> None:
        """Test that raw bytes from core are written to the output path."""
        mock_client.generate_core.return_value = sample_image_bytes
        output = tmp_path / "sunset.png"

        cli.main(["A sunset", "-o", str(output), "--style-preset", "anime", "--seed", "0"])

        assert output.read_bytes() == sample_image_bytes
        mock_client.generate_core.assert_called_once_with(
            "A sunset", options={"style_preset": "anime", "seed": 0}, json=False
        )
        assert "Image saved to" in capsys.readouterr().out

    def test_sd3_image_to_image_options(
        self, mock_client, tmp_path: Path, sample_image_path: Path, sample_image_bytes: bytes
    ) -> None:
        """Test that sd3 flags become form fields with a file reference."""
        mock_client.generate_sd3.return_value = sample_image_bytes

        cli.main(
            [
                "Make it winter",
                "--model",
                "sd3",
                "--mode",
                "image-to-image",
                "--image",
                str(sample_image_path),
                "--strength",
                "0.75",
                "--sd3-model",
                "sd3-turbo",
                "-o",
                str(tmp_path / "winter.png"),
            ]
        )

        options = mock_client.generate_sd3.call_args.kwargs["options"]
        assert options == {
            "mode": "image-to-image",
            "image": FileRef(sample_image_path),
            "strength": 0.75,
            "model": "sd3-turbo",
        }

    def test_error_exits_nonzero(self, mock_client, tmp_path: Path, capsys) -> None:
        """Test that client errors are reported with exit code 1."""
        mock_client.generate_core.side_effect = TransportError("HTTP 401", status_code=401)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["A sunset", "-o", str(tmp_path / "x.png")])

        assert exc_info.value.code == 1
        assert "Error: HTTP 401" in capsys.readouterr().out

    def test_missing_prompt_prints_help(self, capsys) -> None:
        """Test that running without a prompt fails."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    def test_list_options(self, capsys) -> None:
        """Test that option values are listed."""
        cli.main(["--list-options"])

        out = capsys.readouterr().out
        assert "16:9" in out
        assert "neon-punk" in out
