"""
Prompt templates for DSA coaching.

One fixed template per interaction type. Every template ends with the
no-solution instruction.
"""
from __future__ import annotations

from .models import (
    ApproachAnalysis,
    ChatFollowUp,
    CodeAnalysis,
    ConversationEntry,
    InteractionRequest,
    ProblemContext,
)
from .utils import truncate


NO_SOLUTION_INSTRUCTION = "Do not reveal the full solution."

DESCRIPTION_LIMIT = 500
CODE_LIMIT = 2000
CODE_TRUNCATION_MARKER = "\n// ... (code truncated)"
HISTORY_WINDOW = 6
HISTORY_MESSAGE_LIMIT = 200

SENDER_LABELS = {"user": "Student", "assistant": "Coach"}

SECTION_CONTRACT = """Your response must be concise and structured with these sections, with clear headings and short paragraphs. Do not use markdown bullets or asterisks.
1) Logic Flow: {logic}
2) Complexity: Time and Space complexities in O-notation with a one-sentence justification.
3) Edge Cases: Enumerate edge cases relevant to this problem and state whether {subject} handles each. If it fails, explain exactly which scenarios fail and why.
4) Optimization: Concrete, problem-specific ways to make {subject} more efficient (algorithmic ideas, data structures, pruning, or memory reductions) with a brief rationale.
5) Next Questions: 2-3 guiding questions tailored to this problem that nudge the user to think deeper."""


def _problem_block(problem: ProblemContext) -> str:
    lines = [
        "Problem Title:",
        problem.title,
        "",
        "Problem Description (truncated as provided by the client):",
        truncate(problem.description, DESCRIPTION_LIMIT),
    ]
    if problem.constraints:
        lines += ["", "Constraints:", *problem.constraints]
    if problem.examples:
        lines += ["", "Examples:", *problem.examples]
    return "\n".join(lines)


def truncate_code(code: str) -> str:
    if len(code) <= CODE_LIMIT:
        return code
    return code[:CODE_LIMIT] + CODE_TRUNCATION_MARKER


def format_history(history: list[ConversationEntry]) -> str:
    """Render the most recent entries, each capped, one per paragraph."""
    recent = history[-HISTORY_WINDOW:] if history else []
    return "\n\n".join(
        f"{SENDER_LABELS[entry.sender]}: {truncate(entry.message, HISTORY_MESSAGE_LIMIT)}"
        for entry in recent
    )


def _approach_prompt(request: ApproachAnalysis) -> str:
    contract = SECTION_CONTRACT.format(
        logic="Summarize the exact approach the user is following and whether the reasoning is correct.",
        subject="the approach",
    )
    return f"""You are an expert DSA coach. Analyze the user's approach for the following problem.

{_problem_block(request.problem)}

User Approach:
{request.approach}

{contract}

Be specific to the problem and the approach and avoid generic advice. {NO_SOLUTION_INSTRUCTION}"""


def _code_prompt(request: CodeAnalysis) -> str:
    contract = SECTION_CONTRACT.format(
        logic="Describe the current logical approach the code implements. Assess correctness for this problem.",
        subject="the code",
    )
    return f"""You are a senior DSA mentor. Review the user's code for the given problem.

{_problem_block(request.problem)}

User Code (may be truncated):
{truncate_code(request.code)}

{contract}

Tailor everything to the provided problem and code and avoid generic advice. {NO_SOLUTION_INSTRUCTION}"""


def _chat_prompt(request: ChatFollowUp) -> str:
    return f"""You are continuing a DSA coaching conversation about: "{request.problem.title}"

RECENT CONVERSATION:
{format_history(request.history)}

STUDENT'S NEW MESSAGE:
"{request.message}"

YOUR RESPONSE:
Continue coaching them thoughtfully. Ask probing questions and provide hints, helping them think through the problem step by step. Focus on understanding their current thinking, identifying gaps in their logic and guiding them toward insights.

Keep it conversational and supportive. {NO_SOLUTION_INSTRUCTION}"""


TEMPLATES = {
    "approach_analysis": _approach_prompt,
    "code_analysis": _code_prompt,
    "chat_followup": _chat_prompt,
}


def build_prompt(request: InteractionRequest) -> str:
    """
    Build the prompt for an interaction request.

    Args:
        request: Approach, code or chat request

    Returns:
        Formatted prompt string
    """
    template = TEMPLATES.get(getattr(request, "type", None))
    if template is None:
        raise TypeError(f"Unsupported interaction request: {type(request).__name__}")
    return template(request)
