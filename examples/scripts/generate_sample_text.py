from __future__ import annotations

import json
import random
from pathlib import Path

WORDS = [
    "the", "and", "that", "there", "these", "then", "them", "this", "their",
    "into", "unto", "said", "shall", "land", "hand", "stand", "sand", "tent",
    "rest", "nest", "seat", "east", "tree", "stone", "store", "tone", "note",
]

NAMES = [
    "ada", "alan", "barbara", "claude", "dennis", "edsger", "frances", "grace",
    "guido", "hedy", "ivan", "john", "ken", "linus", "margaret", "niklaus",
    "radia", "richard", "sophie", "tim", "tony", "vint", "whitfield", "yukihiro",
    "barbara", "zuse", "donald", "leslie", "robin", "shafi",
]


def main() -> None:
    rng = random.Random(42)
    out = []
    for _ in range(50000):
        out.append(rng.choice(WORDS))
    text = " ".join(out)
    data = Path("examples/data")
    data.mkdir(parents=True, exist_ok=True)
    (data / "corpus.txt").write_text(text, encoding="utf-8")
    (data / "words.txt").write_text("\n".join(sorted(set(WORDS))) + "\n", encoding="utf-8")
    (data / "names.txt").write_text("\n".join(NAMES) + "\n", encoding="utf-8")
    config = {"repetitions": 5, "target_length": 20000, "min_word_length": 3, "max_word_length": 5, "seed": 7}
    (data / "run.json").write_text(json.dumps(config, indent=2), encoding="utf-8")
    print("Wrote examples/data/{corpus,words,names}.txt and examples/data/run.json")


if __name__ == "__main__":
    main()
