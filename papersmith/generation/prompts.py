from __future__ import annotations

import json

from papersmith.models import GenerationConfig, Question

SYSTEM_PROMPT = "You are an expert academic question paper generator. Output only what is asked."


def source_entry(q: Question) -> dict:
    return {
        "id": q.id,
        "questionText": q.text,
        "marks": q.marks,
        "unitId": q.unit_id,
        "bloomLevelId": q.bloom_level.value,
        "difficultyLevelId": q.difficulty.value,
        "type": q.question_type.value,
    }


def build_paper_prompt(config: GenerationConfig, pool: list[Question]) -> str:
    units = "\n".join(
        f"- Unit {u.unit_number}: {u.title} (Topics: {', '.join(u.topics) or 'n/a'})" for u in config.units
    )
    unit_names = ", ".join(f"Unit {u.unit_number}" for u in config.units)

    return f"""Generate a question paper for Course ID: {config.course_id}, Exam Type: {config.exam_type}, Total Marks: {config.total_marks}.

The paper must cover exactly these {len(config.units)} units:
{units}

Rules:
1. Distribute marks roughly equally across the selected units: {unit_names}.
2. Adhere to these constraints:
   - Difficulty (% of marks): {json.dumps(config.difficulty_distribution)}
   - Bloom levels (% of marks): {json.dumps({str(k): v for k, v in config.bloom_distribution.items()})}
3. Select questions ONLY from the source question bank below, by their "id".

Source question bank:
{json.dumps([source_entry(q) for q in pool])}

Return ONLY a JSON object:
{{
  "questions": [
    {{"id": 1, "questionText": "...", "marks": 5, "unitId": 1, "bloomLevelId": 1, "difficultyLevelId": "easy", "type": "short"}}
  ],
  "totalMarks": {config.total_marks}
}}"""
