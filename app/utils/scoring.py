from typing import Mapping, Sequence

from app.models.study_models import QuestionResult, QuizQuestion, QuizScore


def is_complete(questions: Sequence[QuizQuestion], answers: Mapping[int, str]) -> bool:
    """A quiz can be submitted once every question has an answer."""
    return all(i in answers for i in range(len(questions)))


def score_quiz(questions: Sequence[QuizQuestion], answers: Mapping[int, str]) -> QuizScore:
    """
    Score a quiz:
    - 1 point per question whose chosen option equals its correct answer
    - unanswered questions and out-of-range indices score nothing
    """
    results = []
    for index, question in enumerate(questions):
        selected = answers.get(index)
        results.append(QuestionResult(
            index=index,
            selected=selected,
            correct_answer=question.correct_answer,
            is_correct=selected is not None and selected == question.correct_answer,
        ))

    return QuizScore(
        score=sum(1 for r in results if r.is_correct),
        total=len(questions),
        complete=is_complete(questions, answers),
        results=results,
    )
