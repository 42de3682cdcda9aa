"""
test_cli.py

Unit tests for the CLI: argument parsing, output files and error exits.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from tattoo_studio.cli import main
from tattoo_studio.errors import EmptyResultError
from tattoo_studio.media.reference import MediaReference


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("tattoo_studio.config.load_dotenv"):
        yield


def _run(monkeypatch, capsys, *argv):
    monkeypatch.setattr("sys.argv", ["tattoo-studio", *argv])
    main()
    return capsys.readouterr()


class TestCLI:
    def test_no_command_prints_help(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["tattoo-studio"])
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 0
        assert "usage" in capsys.readouterr().out

    def test_generate_writes_image(self, monkeypatch, capsys, tmp_path):
        out_file = tmp_path / "design.png"
        captured = _run(
            monkeypatch, capsys,
            "generate", "--prompt", "a red dragon wrapping an arm", "--out", str(out_file), "--llm", "mock",
        )

        summary = json.loads(captured.out)
        assert summary["flow"] == "generate"
        assert summary["mime_type"] == "image/png"
        assert summary["out"] == str(out_file)
        assert out_file.read_bytes().startswith(b"\x89PNG")
        assert summary["bytes"] == out_file.stat().st_size

    def test_generate_short_prompt_exits(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setattr(
            "sys.argv",
            ["tattoo-studio", "generate", "--prompt", "tiny", "--out", str(tmp_path / "x.png"), "--llm", "mock"],
        )
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "prompt" in capsys.readouterr().err
        assert not (tmp_path / "x.png").exists()

    @patch("tattoo_studio.cli.generate_tattoo_design", new_callable=AsyncMock)
    def test_generate_empty_result_exits(self, mock_generate, monkeypatch, capsys, tmp_path):
        mock_generate.side_effect = EmptyResultError("No tattoo design was generated.")
        monkeypatch.setattr(
            "sys.argv",
            ["tattoo-studio", "generate", "--prompt", "a red dragon wrapping an arm", "--out", str(tmp_path / "x.png")],
        )
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "No tattoo design was generated." in capsys.readouterr().err
        mock_generate.assert_awaited_once_with({"prompt": "a red dragon wrapping an arm"}, llm_backend="gemini")

    def test_simulate_from_files(self, monkeypatch, capsys, tmp_path):
        tattoo = tmp_path / "tattoo.png"
        tattoo.write_bytes(b"A")
        photo = tmp_path / "arm.jpg"
        photo.write_bytes(b"f")
        out_file = tmp_path / "preview.png"

        captured = _run(
            monkeypatch, capsys,
            "simulate", "--tattoo", str(tattoo), "--body-part", "forearm",
            "--photo", str(photo), "--out", str(out_file), "--llm", "mock",
        )

        summary = json.loads(captured.out)
        assert summary["flow"] == "simulate"
        assert out_file.exists()

    @patch("tattoo_studio.cli.simulate_tattoo_placement", new_callable=AsyncMock)
    def test_simulate_passes_data_uris(self, mock_simulate, monkeypatch, capsys):
        mock_simulate.return_value = type(
            "Out", (), {"simulated_tattoo_uri": "data:image/png;base64,QQ=="}
        )()
        captured = _run(
            monkeypatch, capsys,
            "simulate", "--tattoo", "data:image/png;base64,QQ==", "--body-part", "forearm",
            "--photo", "data:image/jpeg;base64,Zg==",
        )

        request = mock_simulate.await_args.args[0]
        assert request == {
            "tattooDataUri": "data:image/png;base64,QQ==",
            "bodyPart": "forearm",
            "bodyPartPhotoUri": "data:image/jpeg;base64,Zg==",
        }
        summary = json.loads(captured.out)
        assert summary["out"] is None
        assert summary["bytes"] == len(MediaReference.parse("data:image/png;base64,QQ==").data)

    def test_simulate_missing_file_exits(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setattr(
            "sys.argv",
            [
                "tattoo-studio", "simulate", "--tattoo", str(tmp_path / "missing.png"),
                "--body-part", "back", "--photo", "data:image/jpeg;base64,Zg==", "--llm", "mock",
            ],
        )
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "Image not found" in capsys.readouterr().err

    def test_simulate_unknown_image_type_exits(self, monkeypatch, capsys, tmp_path):
        blob = tmp_path / "tattoo"
        blob.write_bytes(b"A")
        monkeypatch.setattr(
            "sys.argv",
            [
                "tattoo-studio", "simulate", "--tattoo", str(blob),
                "--body-part", "back", "--photo", "data:image/jpeg;base64,Zg==", "--llm", "mock",
            ],
        )
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
        assert "MIME type" in capsys.readouterr().err

    @patch("tattoo_studio.cli.generate_tattoo_design", new_callable=AsyncMock)
    def test_model_side_value_error_propagates(self, mock_generate, monkeypatch, tmp_path):
        boom = ValueError("unexpected response from model")
        mock_generate.side_effect = boom
        monkeypatch.setattr(
            "sys.argv",
            ["tattoo-studio", "generate", "--prompt", "a red dragon wrapping an arm", "--out", str(tmp_path / "x.png")],
        )
        with pytest.raises(ValueError) as exc:
            main()
        assert exc.value is boom

    def test_unknown_log_level_does_not_crash(self, monkeypatch, capsys, tmp_path):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        captured = _run(
            monkeypatch, capsys,
            "generate", "--prompt", "a red dragon wrapping an arm",
            "--out", str(tmp_path / "design.png"), "--llm", "mock",
        )
        assert json.loads(captured.out)["flow"] == "generate"
