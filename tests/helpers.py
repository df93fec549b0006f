"""Shared test doubles and page fixtures"""
import json


PROBLEM_URL = "https://leetcode.com/problems/two-sum/"

TWO_SUM_HTML = """
<html>
<body>
  <div data-cy="question-title">1. Two Sum</div>
  <div data-key="description-content">
    <p>Given an array of integers nums and an integer target, return indices of the two numbers such that they add up to target.</p>
    <pre>Example 1:
Input: nums = [2,7,11,15], target = 9
Output: [0,1]</pre>
    <pre>Input: nums = [3,2,4], target = 6
Output: [1,2]</pre>
    <pre>Input: nums = [3,3], target = 6
Output: [0,1]</pre>
    <pre>Input: nums = [1,5], target = 6
Output: [0,1]</pre>
    <pre>x</pre>
    <ul>
      <li>2 &lt;= nums.length &lt;= 10^4</li>
      <li>-10^9 &lt;= nums[i] &lt;= 10^9</li>
      <li>Only one valid answer exists.</li>
    </ul>
  </div>
  <div class="monaco-editor">
    <div class="view-lines">
      <div class="view-line"><span><span>class</span> Solution:</span></div>
      <div class="view-line"><span>    def twoSum(self, nums, target):</span></div>
      <div class="view-line"><span>        return []</span></div>
    </div>
  </div>
</body>
</html>
"""


class RecordingPanel:
    """Panel that records every render call for assertions."""

    def __init__(self):
        self.calls = []
        self.messages = []
        self.notices = []
        self.complexities = []
        self.code_input = None

    def set_mode(self, mode):
        self.calls.append(("set_mode", mode))

    def set_loading(self, action, loading):
        self.calls.append(("set_loading", action, loading))

    def set_code_input(self, code):
        self.code_input = code

    def append_message(self, entry):
        self.messages.append(entry)

    def show_complexity(self, complexity):
        self.complexities.append(complexity)

    def show_notice(self, message, level="info"):
        self.notices.append((message, level))

    def reset(self):
        self.calls.append(("reset",))
        self.messages = []

    def destroy(self):
        self.calls.append(("destroy",))


class StubProvider:
    """Stands in for GeminiProvider in relay tests."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def get_model_name(self):
        return "stub-model"

    def is_available(self):
        return True

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class RelayStub:
    """httpx MockTransport handler scripted with queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def bodies(self):
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]
