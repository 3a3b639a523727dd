import os
import re
from typing import Dict, List, Optional

GREETINGS = "GREETINGS"
CLARIFICATIONS = "CLARIFICATIONS"


class PhraseLoader:
    """Loads phrase banks from a markdown file.

    Each bank is a level-2 header followed by one "- phrase" bullet per entry.
    """

    def __init__(self, file_path: Optional[str] = None):
        if not file_path:
            # Default path relative to this file
            current_dir = os.path.dirname(os.path.abspath(__file__))
            file_path = os.path.join(current_dir, "phrases.md")

        self.file_path = file_path
        self._banks: Dict[str, List[str]] = {}
        self._load_banks()

    def _load_banks(self):
        """Parses the markdown file for level-2 headers and their bullet lists."""
        if not os.path.exists(self.file_path):
            raise FileNotFoundError(f"Phrases file not found at: {self.file_path}")

        with open(self.file_path, "r", encoding="utf-8") as f:
            content = f.read()

        chunks = re.split(r'^##\s+', content, flags=re.MULTILINE)

        for chunk in chunks[1:]:
            lines = chunk.split("\n", 1)
            bank_name = lines[0].strip()
            body = lines[1] if len(lines) > 1 else ""

            phrases = [
                match.strip()
                for match in re.findall(r'^\s*-\s+(.+)$', body, flags=re.MULTILINE)
                if match.strip()
            ]
            self._banks[bank_name] = phrases

    def get_bank(self, name: str) -> List[str]:
        """Retrieves a non-empty phrase bank by its header name."""
        phrases = self._banks.get(name)
        if not phrases:
            raise KeyError(f"Phrase bank '{name}' missing or empty in {self.file_path}")
        return list(phrases)
