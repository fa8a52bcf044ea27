"""
Prompt templates and response schemas for study material generation.

`build_instruction` is a pure function: topic + kind + language name in,
prompt text and (for structured kinds) a Gemini response schema out.
"""

from google.genai import types

from app.errors import InvalidMaterialKind
from app.models.study_models import GenerationInstruction, MaterialKind

QUIZ_QUESTION_COUNT = 20
QUIZ_OPTION_COUNT = 4
TIMELINE_MIN_EVENTS = 5
FLASHCARD_COUNT = 8


SUMMARY_PROMPT = (
    'Provide a concise, easy-to-understand summary for the topic: "{topic}". '
    "Structure it in well-formed paragraphs. The output must be in {language}."
)

BASE_PROMPT = 'Based on the topic "{topic}", please generate the following content in {language}.'

QUIZ_PROMPT = (
    "{base} Generate a {count}-question multiple-choice quiz with {options} options "
    "for each question. Ensure exactly one option is clearly correct, and copy that "
    "option verbatim into correctAnswer."
)

TIMELINE_PROMPT = (
    "{base} Generate a timeline of at least {count} key events, "
    "in chronological order."
)

FLASHCARD_PROMPT = "{base} Generate {count} flashcards with key terms and their definitions."

CHAT_SYSTEM_PROMPT = """You are a helpful and friendly study assistant for 'Sirahpidea'.
You will answer questions about the topic: "{topic}".
Your knowledge is strictly limited to this topic.
If the user asks about anything else, politely state that you can only discuss the selected topic and guide them back.
Keep your answers concise and easy for a student to understand.
You must answer in {language}."""


def _string(description: str | None = None) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


def _list_of(properties: dict[str, types.Schema]) -> types.Schema:
    return types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties=properties,
            required=list(properties),
        ),
    )


QUIZ_SCHEMA = _list_of({
    "question": _string(),
    "options": types.Schema(type=types.Type.ARRAY, items=_string()),
    "correctAnswer": _string("Must be exactly one of the options."),
})

TIMELINE_SCHEMA = _list_of({
    "date": _string("The year or specific date of the event."),
    "event": _string("A short title for the event."),
    "description": _string("A brief one-sentence description of the event."),
})

FLASHCARD_SCHEMA = _list_of({
    "term": _string("The key term or name."),
    "definition": _string("A concise definition of the term."),
})


def build_instruction(topic: str, kind: MaterialKind, language_name: str) -> GenerationInstruction:
    """
    Build the prompt and response schema for one generation request.

    Raises:
        InvalidMaterialKind: if `kind` is not one of the four material kinds.
    """
    base = BASE_PROMPT.format(topic=topic, language=language_name)

    if kind == MaterialKind.SUMMARY:
        return GenerationInstruction(prompt=SUMMARY_PROMPT.format(topic=topic, language=language_name))
    if kind == MaterialKind.QUIZ:
        return GenerationInstruction(
            prompt=QUIZ_PROMPT.format(base=base, count=QUIZ_QUESTION_COUNT, options=QUIZ_OPTION_COUNT),
            output_schema=QUIZ_SCHEMA,
        )
    if kind == MaterialKind.TIMELINE:
        return GenerationInstruction(
            prompt=TIMELINE_PROMPT.format(base=base, count=TIMELINE_MIN_EVENTS),
            output_schema=TIMELINE_SCHEMA,
        )
    if kind == MaterialKind.FLASHCARDS:
        return GenerationInstruction(
            prompt=FLASHCARD_PROMPT.format(base=base, count=FLASHCARD_COUNT),
            output_schema=FLASHCARD_SCHEMA,
        )
    raise InvalidMaterialKind(kind)


def build_chat_system_prompt(topic: str, language_name: str) -> str:
    return CHAT_SYSTEM_PROMPT.format(topic=topic, language=language_name)
