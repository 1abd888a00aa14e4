from __future__ import annotations

from fastapi import Request

from nanushi.content import BlogCollection, TutorialSeries
from nanushi.mail import EmailTemplates, Mailer
from nanushi.store import MissionStore


def get_store(request: Request) -> MissionStore:
    return request.app.state.store


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_templates(request: Request) -> EmailTemplates:
    return request.app.state.templates


def get_blog(request: Request) -> BlogCollection:
    return request.app.state.blog


def get_tutorials(request: Request) -> dict[str, TutorialSeries]:
    return request.app.state.tutorials
