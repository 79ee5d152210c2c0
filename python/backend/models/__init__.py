from backend.models.dictionary import DictionaryEntry, SortMode, WordDictionary
from backend.models.grid import Coord, Grid, Movement, Placement, Relocation
from backend.models.letters import LETTER_VALUES, LetterSource, letter_value
from backend.models.savegame import SaveGameStore, SaveState
from backend.models.shuffle import ShuffleMeter
from backend.models.wordbank import WordBank

__all__ = [
    "Coord",
    "DictionaryEntry",
    "Grid",
    "LETTER_VALUES",
    "LetterSource",
    "Movement",
    "Placement",
    "Relocation",
    "SaveGameStore",
    "SaveState",
    "ShuffleMeter",
    "SortMode",
    "WordBank",
    "WordDictionary",
    "letter_value",
]
