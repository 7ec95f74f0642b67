"""Prompts for the repair advisor."""

SYSTEM_PROMPT = """You are a service expert for commercial fitness equipment \
(treadmills, cross trainers, strength machines) working for GymFix.

Answer concisely in Polish as a plain-text bulleted list using dashes.
Do not use Markdown formatting.
"""

REPAIR_PROMPT_TEMPLATE = """Machine: {machine_model}
Problem reported by the client: {description}

Parts available in the warehouse (names): {available_parts}.

Your task:
1. Give 3 likely causes of the fault.
2. Suggest which of the available parts may be needed for the repair.
3. If parts are missing from the warehouse, suggest what should be ordered.
"""

# Returned instead of an analysis whenever the advisor cannot answer
NO_ANALYSIS_MESSAGE = "Nie udało się wygenerować analizy."
CONNECTION_ERROR_MESSAGE = "Błąd połączenia z asystentem AI."


def build_repair_prompt(machine_model: str, description: str,
                        available_parts: list[str]) -> str:
    return REPAIR_PROMPT_TEMPLATE.format(
        machine_model=machine_model,
        description=description,
        available_parts=", ".join(available_parts) or "-",
    )
