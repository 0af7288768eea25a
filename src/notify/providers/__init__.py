"""Built-in delivery providers."""

from __future__ import annotations

from .base import BaseProvider, Provider, get_param, split_host_port, split_token_url
from .discord import DiscordWebhookProvider
from .gchat import GoogleChatProvider
from .gotify import GotifyProvider
from .json_webhook import JsonWebhookProvider
from .mattermost import MattermostProvider
from .msteams import MSTeamsProvider
from .ntfy import NtfyProvider
from .onesignal import OneSignalProvider
from .pushover import PushoverProvider
from .rocketchat import RocketChatWebhookProvider
from .slack import SlackWebhookProvider
from .smtp import SmtpProvider
from .telegram import TelegramBotProvider
from .twilio import TwilioProvider

__all__ = [
    "BaseProvider",
    "DiscordWebhookProvider",
    "GoogleChatProvider",
    "GotifyProvider",
    "JsonWebhookProvider",
    "MSTeamsProvider",
    "MattermostProvider",
    "NtfyProvider",
    "OneSignalProvider",
    "Provider",
    "PushoverProvider",
    "RocketChatWebhookProvider",
    "SlackWebhookProvider",
    "SmtpProvider",
    "TelegramBotProvider",
    "TwilioProvider",
    "create_default_providers",
    "get_param",
    "split_host_port",
    "split_token_url",
]


def create_default_providers() -> list[Provider]:
    """Return fresh instances of every built-in provider."""
    return [
        DiscordWebhookProvider(),
        SlackWebhookProvider(),
        TelegramBotProvider(),
        JsonWebhookProvider(),
        SmtpProvider(),
        RocketChatWebhookProvider(),
        NtfyProvider(),
        GotifyProvider(),
        MattermostProvider(),
        MSTeamsProvider(),
        GoogleChatProvider(),
        PushoverProvider(),
        OneSignalProvider(),
        TwilioProvider(),
    ]
