"""
Request/response messages between the page layer and the popup UI.
"""
from __future__ import annotations

import logging
from typing import Any

from .controller import CoachController

logger = logging.getLogger(__name__)

GET_PROBLEM_DATA = "getProblemData"
GET_CURRENT_CODE = "getCurrentCode"


class MessageHandler:
    """Answers popup requests from the controller's current page state."""

    def __init__(self, controller: CoachController):
        self.controller = controller

    def handle(self, request: dict[str, Any]) -> dict[str, Any]:
        action = request.get("action")
        try:
            if action == GET_PROBLEM_DATA:
                return {
                    "problemData": self.controller.problem.model_dump(mode="json", by_alias=True),
                    "userCode": self.controller.get_user_code(),
                }
            if action == GET_CURRENT_CODE:
                return {"userCode": self.controller.get_user_code()}
        except Exception as e:
            logger.error(f"Message handler error: {e}")
            return {"error": "Failed to process request"}

        return {"error": "Unknown action"}
