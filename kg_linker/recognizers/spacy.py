from typing import Dict, List, Optional

import spacy

from kg_linker.registry import recognizers
from kg_linker.types import EntityMention, Offset

BLANK_PREFIX = "blank:"


@recognizers.register("spacy")
class SpacyRecognizer:
    """spaCy NER recognizer.

    ``model`` is a spaCy package name, or ``blank:<lang>`` for an empty
    pipeline that relies on entity-ruler ``patterns``.
    """

    def __init__(self, model: str = "en_core_web_sm", patterns: Optional[List[Dict]] = None) -> None:
        if model.startswith(BLANK_PREFIX):
            self.nlp = spacy.blank(model[len(BLANK_PREFIX):])
        else:
            self.nlp = spacy.load(model)
        if patterns:
            ruler = self.nlp.add_pipe("entity_ruler")
            ruler.add_patterns(patterns)

    def extract(self, text: str) -> List[EntityMention]:
        doc = self.nlp(text)
        return [
            EntityMention(
                text=ent.text,
                offset=Offset(index=i, start=ent.start_char, length=len(ent.text)),
                label=ent.label_,
            )
            for i, ent in enumerate(doc.ents)
        ]
