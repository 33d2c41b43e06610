from fastapi import Request

from lobby.services.membership_service import MembershipService


def get_membership(request: Request) -> MembershipService:
    return request.app.state.membership
