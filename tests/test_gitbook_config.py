import pytest

from gitbook_config import ConfigMalformed, ConfigMissing, load_config, parse_config

VALID = """\
root: ./
structure:
  readme: README.md
  summary: SUMMARY.md
"""


def test_parse_valid_config_defaults_format():
    config = parse_config(VALID)
    assert config.root == "./"
    assert config.structure.readme == "README.md"
    assert config.structure.summary == "SUMMARY.md"
    assert config.format is None
    assert config.effective_format == "markdown"


def test_parse_keeps_explicit_format():
    config = parse_config(VALID + "format: asciidoc\n")
    assert config.effective_format == "asciidoc"


@pytest.mark.parametrize("text, field", [
    ("structure:\n  readme: README.md\n  summary: SUMMARY.md\n", "root"),
    ("root: ./\n", "structure"),
    ("root: ./\nstructure:\n  summary: SUMMARY.md\n", "structure.readme"),
    ("root: ./\nstructure:\n  readme: README.md\n", "structure.summary"),
    ("root: ./\nstructure:\n  readme: ''\n  summary: SUMMARY.md\n", "structure.readme"),
])
def test_missing_required_field_is_malformed(text, field):
    with pytest.raises(ConfigMalformed, match=f'"{field}"'):
        parse_config(text)


def test_yaml_syntax_error_is_malformed():
    with pytest.raises(ConfigMalformed, match="Failed to parse"):
        parse_config("root: [unclosed\n")


def test_non_mapping_document_is_malformed():
    with pytest.raises(ConfigMalformed):
        parse_config("- just\n- a list\n")


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigMissing):
        load_config(tmp_path)


def test_load_config_reads_from_root(tmp_path):
    (tmp_path / ".gitbook.yaml").write_text(VALID, encoding="utf-8")
    assert load_config(tmp_path).structure.summary == "SUMMARY.md"


def test_invalid_timestamp_value_is_malformed():
    with pytest.raises(ConfigMalformed, match="Failed to parse"):
        parse_config("root: 2020-13-01\nstructure:\n  readme: README.md\n  summary: SUMMARY.md\n")
