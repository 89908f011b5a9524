"""Prompt assembly for research topic suggestions."""
from topic_shared.schemas import AcademicLevel

MASTERS_PROMPT_INSTRUCTION = "موضوعات پژوهشی را پیشنهاد دهید که رابطه ای و چند متغیره باشند."
PHD_PROMPT_INSTRUCTION = "موضوعات پژوهشی را در سطح مدل سازی و دکتری پیشنهاد دهید."

BASE_PROMPT_TEMPLATE = """من به دنبال موضوعات پژوهشی در رشته تحصیلی "{field_of_study}" هستم.
  کلمات کلیدی مورد علاقه من عبارتند از: "{keywords}".
  لطفاً حداقل 3 تا 5 موضوع را ارائه دهید و توضیحات مختصری برای هر یک ارائه دهید."""

LEVEL_INSTRUCTIONS = {
    AcademicLevel.MASTERS: MASTERS_PROMPT_INSTRUCTION,
    AcademicLevel.PHD: PHD_PROMPT_INSTRUCTION,
}


def build_base_prompt(field_of_study: str, keywords: str) -> str:
    # str.format does not re-parse substituted values, so braces in user input are safe.
    return BASE_PROMPT_TEMPLATE.format(field_of_study=field_of_study, keywords=keywords)


def build_prompt(academic_level: AcademicLevel, field_of_study: str, keywords: str) -> str:
    return f"{build_base_prompt(field_of_study, keywords)}\n{LEVEL_INSTRUCTIONS[academic_level]}"
