"""Shared pytest fixtures for iphone-to-pixel tests."""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

# exiftool's AllDates shortcut
ALL_DATES = ("DateTimeOriginal", "CreateDate", "ModifyDate")


def _key(path) -> str:
    return str(Path(path).resolve())


class FakeMediaTools:
    """
    In-memory stand-in for ffprobe, ffmpeg and exiftool.

    Files are keyed by their path string. Tags written by exiftool are stored
    per file so later reads see them, like the real tool.
    """

    def __init__(self):
        self.codecs: dict[str, tuple[str, str]] = {}
        self.tags: dict[str, dict[str, str]] = {}
        self.ffmpeg_failures: set[str] = set()
        self.unwritable: set[str] = set()
        self.calls: list[list[str]] = []

    # Test helpers

    def add_video(self, path: Path, video: str = "hevc", audio: str = "aac", **tags: str) -> Path:
        path.write_bytes(b"fake video data")
        self.codecs[_key(path)] = (video, audio)
        if tags:
            self.tags[_key(path)] = dict(tags)
        return path

    def add_photo(self, path: Path, data: bytes = b"fake heic data", **tags: str) -> Path:
        path.write_bytes(data)
        if tags:
            self.tags[_key(path)] = dict(tags)
        return path

    def fail_ffmpeg(self, path: Path) -> None:
        self.ffmpeg_failures.add(_key(path))

    def make_unwritable(self, path: Path) -> None:
        self.unwritable.add(_key(path))

    def tags_of(self, path: Path) -> dict[str, str]:
        return self.tags.get(_key(path), {})

    def calls_to(self, tool: str) -> list[list[str]]:
        return [cmd for cmd in self.calls if Path(cmd[0]).name == tool]

    # subprocess replacements

    def run(self, cmd, *args, **kwargs):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        tool = Path(cmd[0]).name
        if tool == "ffprobe":
            return self._ffprobe(cmd)
        if tool == "exiftool":
            return self._exiftool(cmd)
        raise AssertionError(f"Unexpected subprocess.run call: {cmd}")

    def popen(self, cmd, *args, **kwargs):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        assert Path(cmd[0]).name == "ffmpeg", f"Unexpected Popen call: {cmd}"
        return _FakeFfmpeg(cmd, self)

    def _ffprobe(self, cmd):
        path = _key(cmd[-1])
        selector = cmd[cmd.index("-select_streams") + 1]
        if path not in self.codecs:
            return subprocess.CompletedProcess(cmd, 1, "", f"{path}: Invalid data found")
        video, audio = self.codecs[path]
        codec = video if selector.startswith("v") else audio
        return subprocess.CompletedProcess(cmd, 0, f"{codec}\n" if codec else "", "")

    def _exiftool(self, cmd):
        path = _key(cmd[-1])
        tags = self.tags.get(path, {})

        if "-s3" in cmd:
            tag = cmd[cmd.index("-s3") + 1].lstrip("-")
            value = tags.get(tag, "")
            return subprocess.CompletedProcess(cmd, 0, f"{value}\n" if value else "", "")

        if "-j" in cmd:
            wanted = [a[1:] for a in cmd[1:-1] if a.startswith("-") and a not in ("-j", "-api")]
            record = {"SourceFile": path, **{t: tags[t] for t in wanted if t in tags}}
            return subprocess.CompletedProcess(cmd, 0, json.dumps([record]), "")

        if path in self.unwritable:
            return subprocess.CompletedProcess(cmd, 1, "", "Error: Writing of this type of file is not yet supported")

        written = self.tags.setdefault(path, {})
        for arg in cmd[1:-1]:
            if arg.startswith("-") and "=" in arg:
                tag, value = arg[1:].split("=", 1)
                if tag == "AllDates":
                    for t in ALL_DATES:
                        written[t] = value
                else:
                    written[tag] = value
        return subprocess.CompletedProcess(cmd, 0, "", "")


class _FakeFfmpeg:
    """Popen-like ffmpeg: writes the output file and reports progress."""

    def __init__(self, cmd: list[str], tools: FakeMediaTools):
        self.cmd = cmd
        input_path = _key(cmd[cmd.index("-i") + 1])
        output_path = Path(cmd[-1])
        self.failed = input_path in tools.ffmpeg_failures
        if self.failed:
            output_path.write_bytes(b"trunc")
            self.stderr = iter(["frame=   10 fps=0.0 size=0kB\n", "Conversion failed!\n"])
        else:
            output_path.write_bytes(b"fake mp4 data")
            self.stderr = iter(["frame=   10 fps=0.0 size=1kB\n", "frame=   20 fps=0.0 size=2kB\n"])

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def wait(self):
        return 1 if self.failed else 0


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def media_tools():
    """Patch subprocess so ffprobe/ffmpeg/exiftool run against FakeMediaTools."""
    tools = FakeMediaTools()
    with patch("subprocess.run", side_effect=tools.run), patch("subprocess.Popen", side_effect=tools.popen):
        yield tools


@pytest.fixture(name="_mock_shutil_which")
def mock_shutil_which():
    """Mock shutil.which to simulate available tools."""

    def which_side_effect(tool):
        available = {"ffmpeg", "ffprobe", "exiftool"}
        return f"/usr/bin/{tool}" if tool in available else None

    with patch("shutil.which", side_effect=which_side_effect) as mock:
        yield mock


@pytest.fixture
def part1(tmp_path, media_tools):
    """Takeout-style folder with one HEIC photo and one HEVC+AAC MOV."""
    source = tmp_path / "Part1"
    source.mkdir()
    media_tools.add_photo(source / "IMG_0001.HEIC", DateTimeOriginal="2023:06:01 10:00:00")
    media_tools.add_video(source / "IMG_0002.MOV", "hevc", "aac", CreationDate="2023:06:02 11:00:00+02:00")
    return source
