"""
Canned coaching replies used when the relay cannot be reached.

These are not model output. Every reply is tagged with source="canned".
"""
from __future__ import annotations

import random
import re
from typing import Optional

from .models import (
    ApproachAnalysis,
    AssistantReply,
    CodeAnalysis,
    ComplexityEstimate,
    InteractionRequest,
)


NESTED_FOR = re.compile(r"for.*for", re.DOTALL)

CHAT_REPLIES = (
    "Great question! What edge cases are you considering?",
    "You're thinking in the right direction! How would you handle the worst-case scenario?",
    "Interesting point! What's the trade-off between time and space complexity here?",
    "Good observation! Can you think of a way to optimize this further?",
    "That's a smart approach! Have you considered what happens with duplicate values?",
    "Excellent thinking! How would this scale with very large inputs?",
)


def _canned(text: str, time: Optional[str] = None, space: Optional[str] = None) -> AssistantReply:
    complexity = ComplexityEstimate(time=time, space=space) if time and space else ComplexityEstimate()
    return AssistantReply(response=text, complexity=complexity, source="canned")


def approach_reply(request: ApproachAnalysis) -> AssistantReply:
    approach = request.approach.lower()

    if "hash" in approach or "map" in approach:
        return _canned(
            """Great thinking! Using a hash map is an excellent approach for this problem.

Correctness: a hash map approach should work well.
Efficiency: much better than a brute force O(n^2) scan.
Space trade-off: uses O(n) extra space for faster lookups.

Questions to consider:
What will you store as keys vs values?
How will you handle duplicate elements?
Can you solve it in a single pass through the data?""",
            "O(n)",
            "O(n)",
        )

    if "sort" in approach:
        return _canned(
            """Sorting is a solid approach! Let's analyze this strategy.

Correctness: sorting often simplifies many problems.
Time: usually O(n log n) due to the sort.
Space: can be O(1) if sorting in place.

Consider:
Does the problem allow modifying the input?
Are there faster alternatives without sorting?
What happens after sorting, how do you find the answer?""",
            "O(n log n)",
            "O(1)",
        )

    return _canned(
        """Interesting approach! Let's think through this step by step.

What's the main operation you need to repeat?
How many times will you perform this operation?
What data structure makes this operation fastest?

Can you walk me through your specific algorithmic steps?"""
    )


def code_reply(request: CodeAnalysis) -> AssistantReply:
    code = request.code.lower()

    if NESTED_FOR.search(code):
        return _canned(
            """I see nested loops! Let's work on optimizing this.

Structure: nested loops typically indicate O(n^2) complexity.
Performance: this could be slow for large inputs (n > 10^4).

Optimization strategies:
Can you eliminate the inner loop with a hash map?
Are you doing redundant calculations?
Could sorting help reduce complexity?""",
            "O(n²)",
            "O(1)",
        )

    if "recursive" in code or ("def" in code and "return" in code and "(" in code):
        return _canned(
            """Nice recursive solution! Let's check the efficiency.

Structure: recursive approach detected.
Consider: stack space and potential exponential time.
Optimization: this might benefit from memoization.

Questions:
Are you solving overlapping subproblems?
What's your base case?
Could dynamic programming help?"""
        )

    return _canned(
        """Let me review your code structure.

Logic flow: appears to follow a reasonable structure.
Edge cases: let's make sure all scenarios are handled.

Questions:
How does your solution handle edge cases (empty input, single element)?
What's the bottleneck operation in your algorithm?
Are there any unnecessary operations we can eliminate?"""
    )


def chat_reply(rng: random.Random) -> AssistantReply:
    return AssistantReply(response=rng.choice(CHAT_REPLIES), complexity=None, source="canned")


def canned_reply(request: InteractionRequest, rng: Optional[random.Random] = None) -> AssistantReply:
    """Pick a local reply keyed loosely on the request content."""
    if request.type == "approach_analysis":
        return approach_reply(request)
    if request.type == "code_analysis":
        return code_reply(request)
    return chat_reply(rng or random.Random())
