"""
Prompt construction for shell command generation.
"""

PROMPT_TEMPLATE = """\
You are an expert in shell commands. Your only job is to turn the user's \
request into the exact terminal command that accomplishes it.

Hard requirements:
- Output exactly one JSON object and nothing else.
- The object must have exactly two string keys: "command" and "explanation".
- "command" is a single, copy-pasteable shell command. Use pipes, && or ; to chain steps.
- "explanation" is one short sentence describing what the command does.
- Do not use markdown or code fences. Do not add any text before or after the JSON.

Example: {{"command": "ls -la", "explanation": "Lists all files, including hidden ones, in long format."}}

User request: "{user_text}"
"""


def build_prompt(user_text: str) -> str:
    """Render the user request into the fixed instruction template.

    The text is embedded verbatim; callers reject blank input before
    getting here.
    """
    return PROMPT_TEMPLATE.format(user_text=user_text)
