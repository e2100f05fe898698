"""Build notification subsystem: templated Block Kit messages to Slack webhooks."""

from src.notifier.bindings import BindingResolver, ConfigBindingResolver
from src.notifier.blocks import Attachment, WebhookMessage, parse_blocks
from src.notifier.composer import MessageComposer, compose, status_color
from src.notifier.delivery import WebhookSender
from src.notifier.environment import deployment_info, is_prod
from src.notifier.exceptions import (
    DeliveryError,
    DocumentParseError,
    FilterError,
    NotifierError,
    RenderError,
    ResolutionError,
    SetupError,
    TemplateParseError,
)
from src.notifier.extractors import git_ref, repo_name, source_ref, source_type
from src.notifier.factory import create_notifier, read_template
from src.notifier.filters import EventFilter, ExpressionFilter
from src.notifier.notifier import SlackNotifier
from src.notifier.secrets import EnvSecretGetter, SecretGetter
from src.notifier.templating import HELPERS, BlockKitTemplate, TemplateView

__all__ = [
    "Attachment",
    "BindingResolver",
    "BlockKitTemplate",
    "ConfigBindingResolver",
    "DeliveryError",
    "DocumentParseError",
    "EnvSecretGetter",
    "EventFilter",
    "ExpressionFilter",
    "FilterError",
    "HELPERS",
    "MessageComposer",
    "NotifierError",
    "RenderError",
    "ResolutionError",
    "SecretGetter",
    "SetupError",
    "SlackNotifier",
    "TemplateParseError",
    "TemplateView",
    "WebhookMessage",
    "WebhookSender",
    "compose",
    "create_notifier",
    "deployment_info",
    "git_ref",
    "is_prod",
    "parse_blocks",
    "read_template",
    "repo_name",
    "source_ref",
    "source_type",
    "status_color",
]
