"""Interactive create-aws-lambda wizard.

Key classes:
    LambdaWizard   - Finite-state machine collecting a SelectionSet
    PromptSession  - Numbered-option prompts over a rich console
    WizardStep     - Named wizard states
"""

from .engine import TRANSITIONS, LambdaWizard, WizardStep, api_trigger_features, trigger_features
from .prompts import PromptSession

__all__ = [
    "LambdaWizard",
    "WizardStep",
    "TRANSITIONS",
    "PromptSession",
    "api_trigger_features",
    "trigger_features",
]
