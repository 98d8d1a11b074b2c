from enum import Enum


class NotificationType(str, Enum):
    WAVE = "wave"
    CONNECTION_REQUEST = "connection_request"
    CONNECTION_ACCEPTED = "connection_accepted"
    REPORT_WARNING = "report_warning"
    ACCOUNT_BANNED = "account_banned"
    GAME_INVITATION = "game_invitation"
    GAME_ACCEPTED = "game_accepted"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"
    GAME_DRAW = "game_draw"
    TRUTH_DARE_TURN = "truth_dare_turn"
    NEW_EVENT = "new_event"
    EVENT_INTEREST = "event_interest"
