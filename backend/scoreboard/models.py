from datetime import datetime, timezone

from scoreboard import db

TEAM1 = 'team1'
TEAM2 = 'team2'
TEAMS = (TEAM1, TEAM2)

TEAM_NAME_MAX_LENGTH = 64


class MatchStatus:
    IN_PROGRESS = 'IN_PROGRESS'
    PAUSED = 'PAUSED'
    COMPLETED = 'COMPLETED'


def _utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


class Match(db.Model):
    __tablename__ = 'match'
    id = db.Column(db.Integer, primary_key=True)
    team1_name = db.Column(db.String(TEAM_NAME_MAX_LENGTH), nullable=False)
    team2_name = db.Column(db.String(TEAM_NAME_MAX_LENGTH), nullable=False)
    # Live score of current_set
    team1_score = db.Column(db.Integer, nullable=False, default=0)
    team2_score = db.Column(db.Integer, nullable=False, default=0)
    team1_sets = db.Column(db.Integer, nullable=False, default=0)
    team2_sets = db.Column(db.Integer, nullable=False, default=0)
    current_set = db.Column(db.Integer, nullable=False, default=1)
    status = db.Column(db.String(16), nullable=False, default=MatchStatus.IN_PROGRESS, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    # Undo opportunity for the most recent point
    last_scoring_team = db.Column(db.String(8), nullable=True)
    last_score_time = db.Column(db.DateTime(timezone=True), nullable=True)
    undo_used = db.Column(db.Boolean, nullable=False, default=False)
    # Live score before the most recent manual edit
    previous_team1_score = db.Column(db.Integer, nullable=True)
    previous_team2_score = db.Column(db.Integer, nullable=True)

    sets = db.relationship(
        'SetScore',
        back_populates='match',
        order_by='SetScore.set_number',
        cascade='all, delete-orphan',
    )

    def __init__(self, **kwargs):
        # Column defaults only apply on flush; the engine works on transient instances too
        for name, value in (
            ('team1_score', 0),
            ('team2_score', 0),
            ('team1_sets', 0),
            ('team2_sets', 0),
            ('current_set', 1),
            ('status', MatchStatus.IN_PROGRESS),
            ('undo_used', False),
        ):
            kwargs.setdefault(name, value)
        kwargs.setdefault('created_at', _utcnow())
        super(Match, self).__init__(**kwargs)

    def live_score(self, team):
        return self.team1_score if team == TEAM1 else self.team2_score

    def to_dict(self):
        return {
            'id': self.id,
            'team1Name': self.team1_name,
            'team2Name': self.team2_name,
            'team1Score': self.team1_score,
            'team2Score': self.team2_score,
            'team1Sets': self.team1_sets,
            'team2Sets': self.team2_sets,
            'currentSet': self.current_set,
            'status': self.status,
            'createdAt': _isoformat(self.created_at),
            'sets': [s.to_dict() for s in self.sets],
            'lastScoringTeam': self.last_scoring_team,
            'lastScoreTime': _isoformat(self.last_score_time),
            'undoUsed': bool(self.undo_used),
            'previousTeam1Score': self.previous_team1_score,
            'previousTeam2Score': self.previous_team2_score,
        }

    def __repr__(self):
        return f'<Match {self.id} {self.team1_name} vs {self.team2_name} {self.status}>'


class SetScore(db.Model):
    __tablename__ = 'set_score'
    __table_args__ = (
        db.UniqueConstraint('match_id', 'set_number', name='uq_set_score_match_set_number'),
    )
    id = db.Column(db.Integer, primary_key=True)
    match_id = db.Column(db.Integer, db.ForeignKey('match.id', ondelete='CASCADE'), nullable=False, index=True)
    set_number = db.Column(db.Integer, nullable=False)
    team1_points = db.Column(db.Integer, nullable=False)
    team2_points = db.Column(db.Integer, nullable=False)
    match = db.relationship('Match', back_populates='sets')

    def to_dict(self):
        return {
            'id': self.id,
            'setNumber': self.set_number,
            'team1Points': self.team1_points,
            'team2Points': self.team2_points,
        }
