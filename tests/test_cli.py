from __future__ import annotations

import argparse
import json
from pathlib import Path

import pytest

from scriptforge.cli import _parse_key_value_pairs, main


def test_parse_key_value_pairs():
    properties = _parse_key_value_pairs(["group=org.example", "version=1.0"])
    assert properties == {"group": "org.example", "version": "1.0"}

    with pytest.raises(argparse.ArgumentTypeError):
        _parse_key_value_pairs(["invalid"])
    with pytest.raises(argparse.ArgumentTypeError):
        _parse_key_value_pairs([" =value"])


def _write_description(tmp_path: Path) -> Path:
    path = tmp_path / "description.json"
    path.write_text(
        json.dumps(
            {
                "plugins": [{"id": "java-library"}],
                "repositories": [{"kind": "mavenCentral", "comment": "Use Maven Central"}],
                "dependencies": [{"configuration": "api", "notations": ["org.slf4j:slf4j-api:2.0.7"]}],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_cli_render_prints_script(tmp_path: Path, capsys):
    exit_code = main(["render", str(_write_description(tmp_path)), "-p", "version=1.0"])
    assert exit_code == 0
    assert capsys.readouterr().out == (
        "/*\n"
        " * This file was generated by the Gradle 'init' task.\n"
        " */\n"
        "\n"
        "plugins {\n"
        "    id 'java-library'\n"
        "}\n"
        "\n"
        "repositories {\n"
        "    // Use Maven Central\n"
        "    mavenCentral()\n"
        "}\n"
        "\n"
        "dependencies {\n"
        "    api 'org.slf4j:slf4j-api:2.0.7'\n"
        "}\n"
        "\n"
        "version = '1.0'\n"
    )


def test_cli_render_writes_kotlin_file(tmp_path: Path):
    output_dir = tmp_path / "output"
    exit_code = main(
        ["render", str(_write_description(tmp_path)), "--dsl", "kotlin", "--incubating", "-o", str(output_dir)]
    )
    assert exit_code == 0
    text = (output_dir / "build.gradle.kts").read_text(encoding="utf-8")
    assert " * This project uses @Incubating APIs which are subject to change.\n" in text
    assert '    api("org.slf4j:slf4j-api:2.0.7")\n' in text
    assert "    `java-library`\n" in text


def test_cli_render_without_description(capsys):
    assert main(["render"]) == 0
    assert capsys.readouterr().out == "/*\n * This file was generated by the Gradle 'init' task.\n */\n"


def test_cli_reports_invalid_description(tmp_path: Path, capsys):
    path = tmp_path / "description.json"
    path.write_text(json.dumps({"repositories": [{"kind": "maven"}]}), encoding="utf-8")
    assert main(["render", str(path)]) == 1
    assert "requires a url" in capsys.readouterr().err


def test_cli_reports_missing_description(tmp_path: Path, capsys):
    assert main(["render", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_cli_rejects_unknown_dsl():
    with pytest.raises(SystemExit):
        main(["render", "--dsl", "maven"])


def test_cli_reports_header_comment_that_closes_the_block(tmp_path: Path, capsys):
    path = tmp_path / "description.json"
    path.write_text(json.dumps({"comments": ["see */ here"]}), encoding="utf-8")
    assert main(["render", str(path)]) == 1
    assert "*/" in capsys.readouterr().err
