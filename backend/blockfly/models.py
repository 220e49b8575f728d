from dataclasses import dataclass


@dataclass
class Session:
    id: str
    username: str
    join_time: int  # ms since epoch

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'joinTime': self.join_time,
        }


@dataclass(frozen=True)
class ChatMessage:
    id: int
    user_id: str
    username: str
    content: str
    timestamp: int

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'username': self.username,
            'content': self.content,
            'timestamp': self.timestamp,
        }


@dataclass
class LeaderboardEntry:
    username: str
    score: int

    def to_dict(self):
        return {
            'username': self.username,
            'score': self.score,
        }
