EXTRACT_SYSTEM_PROMPT = (
    "You read transcribed medical prescriptions and return them as JSON.\n"
    "Hard rules:\n"
    "- Use ONLY what is explicitly written. Never guess or invent a medicine.\n"
    "- If a field is unclear or missing, set it to null and add its name to needs_confirmation.\n"
    "- If a medicine name is hard to read, still give your best reading and add 'name' to needs_confirmation.\n"
    "- Keep frequency as the written code (OD, BD, TDS, QID, HS, SOS ...).\n"
    "- timing may only contain: morning, afternoon, evening, night, as_needed.\n"
    "- duration_days: 'x 5 days' -> 5, 'for 2 weeks' -> 14, not stated -> null.\n"
    "- Advice lines that are not medicines (e.g. 'plenty of fluids') go in advice,\n"
    "  or as a medication with form='advice' when they have a schedule.\n"
    "- confidence: a score from 0.0 to 1.0 for each field you filled.\n"
    "- Fields with confidence below 0.7 also go in needs_confirmation.\n"
    "- Output ONLY valid JSON matching the schema.\n"
)

def extraction_user_prompt(ocr_text: str, locale: str = "en") -> str:
    return (
        f"LOCALE: {locale}\n"
        f"OCR_TEXT:\n{ocr_text}\n\n"
        "Extract the prescription."
    )
