from pydantic import BaseModel
from typing import Literal, Optional

Theme = Literal["light", "dark"]
Locale = Literal["en", "ms", "ar"]


class Preferences(BaseModel):
    theme: Theme = "light"
    language: Locale = "en"


class PreferencesUpdate(BaseModel):
    theme: Optional[Theme] = None
    language: Optional[Locale] = None
