from tourneycore.models.participant.participant import Participant

__all__ = ["Participant"]
