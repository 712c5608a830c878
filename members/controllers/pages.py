"""Controllers for the landing page and the members area."""

from typing import List, Optional, Tuple
from http import HTTPStatus
import random
import logging

from .. import domain
from .authentication import LANDING_PAGE

logger = logging.getLogger(__name__)

ResponseData = Tuple[dict, int, dict]


def is_authenticated(session: Optional[domain.Session]) -> bool:
    """True iff there is a session, flagged authenticated and not expired."""
    return session is not None and session.is_authenticated


def landing(session: Optional[domain.Session]) -> ResponseData:
    """Greet members by name, and offer signup/login to everyone else."""
    if is_authenticated(session):
        return {'username': session.username}, HTTPStatus.OK, {}  # type: ignore
    return {'username': None}, HTTPStatus.OK, {}


def members(session: Optional[domain.Session],
            images: List[str]) -> ResponseData:
    """Show the members area, with one of ``images`` picked at random."""
    if not is_authenticated(session):
        logger.debug('Unauthenticated request for members area')
        return {}, HTTPStatus.FOUND, {'Location': LANDING_PAGE}
    image = random.choice(images) if images else None
    return {'username': session.username, 'image': image}, \
        HTTPStatus.OK, {}    # type: ignore
