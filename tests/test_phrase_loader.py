import pytest

from shopassist.infrastructure.phrases.phrase_loader import CLARIFICATIONS, GREETINGS, PhraseLoader


def test_bundled_banks_are_loaded():
    loader = PhraseLoader()

    greetings = loader.get_bank(GREETINGS)
    clarifications = loader.get_bank(CLARIFICATIONS)

    assert greetings and all(isinstance(p, str) and p for p in greetings)
    assert clarifications and all(p.strip() == p for p in clarifications)


def test_custom_file(tmp_path):
    path = tmp_path / "phrases.md"
    path.write_text("# Phrases\n\n## GREETINGS\n- Hey!\n-   Howdy  \n\n## EMPTY\n\n", encoding="utf-8")

    loader = PhraseLoader(str(path))

    assert loader.get_bank("GREETINGS") == ["Hey!", "Howdy"]
    with pytest.raises(KeyError):
        loader.get_bank("EMPTY")
    with pytest.raises(KeyError):
        loader.get_bank("MISSING")


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PhraseLoader(str(tmp_path / "nope.md"))
