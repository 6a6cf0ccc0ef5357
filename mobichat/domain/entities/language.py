from enum import Enum


class Language(str, Enum):
    ar = "ar"
    fr = "fr"
