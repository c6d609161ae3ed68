from typing import Iterable, Sequence


def percentage(correct: int, total: int) -> int:
    """Integer percentage rounded half up (3/8 -> 38, 1/8 -> 13)."""
    if total <= 0:
        raise ValueError('Cannot score a quiz without questions')
    return (200 * correct + total) // (2 * total)


def count_correct(questions: Sequence, answers: Iterable) -> int:
    """Count questions whose matching answer picked the correct option.

    Answers are matched on question id; each question counts at most once,
    so unanswered questions and answers to foreign questions score nothing.
    """
    selected = {}
    for answer in answers:
        selected.setdefault(answer.question_id, answer.selected_option_index)
    correct = 0
    for question in questions:
        if question.id in selected and selected[question.id] == question.correct_answer_index:
            correct += 1
    return correct


def score(questions: Sequence, answers: Iterable) -> int:
    return percentage(count_correct(questions, answers), len(questions))
