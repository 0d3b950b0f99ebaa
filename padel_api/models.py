from padel_api.app import db
from padel_api.time_utils import utcnow_naive, isoformat_or_none


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())

    def to_dict(self):
        return {'id': self.id, 'email': self.email, 'name': self.name}


class Player(db.Model):
    """Entry in a user's private player address book."""
    __tablename__ = 'players'

    id = db.Column(db.Integer, primary_key=True)
    owner_user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    display_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    rating = db.Column(db.Float, nullable=True)
    avatar_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())

    __table_args__ = (
        db.Index('ix_players_owner_display_name', 'owner_user_id', 'display_name'),
    )

    owner = db.relationship('User', backref='players')

    def to_dict(self):
        return {
            'id': self.id,
            'display_name': self.display_name,
            'email': self.email,
            'rating': self.rating,
            'avatar_url': self.avatar_url,
            'created_at': isoformat_or_none(self.created_at),
        }


class ScoringRules(db.Model):
    """Immutable scoring parameters, one row per tournament."""
    __tablename__ = 'scoring_rules'

    id = db.Column(db.Integer, primary_key=True)
    best_of_sets = db.Column(db.Integer, nullable=False)
    golden_point = db.Column(db.Boolean, nullable=False)
    tiebreak_type = db.Column(db.String(40), nullable=False)  # long7, super10, ...
    tiebreak_final_set = db.Column(db.String(40), nullable=False)
    points_win = db.Column(db.Integer, nullable=False)
    points_loss = db.Column(db.Integer, nullable=False)
    points_walkover = db.Column(db.Integer, nullable=False)
    points_retired = db.Column(db.Integer, nullable=False)
    sets_diff_weight = db.Column(db.Integer, nullable=False)
    games_diff_weight = db.Column(db.Integer, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'best_of_sets': self.best_of_sets,
            'golden_point': self.golden_point,
            'tiebreak_type': self.tiebreak_type,
            'tiebreak_final_set': self.tiebreak_final_set,
            'points_win': self.points_win,
            'points_loss': self.points_loss,
            'points_walkover': self.points_walkover,
            'points_retired': self.points_retired,
            'sets_diff_weight': self.sets_diff_weight,
            'games_diff_weight': self.games_diff_weight,
        }


class Tournament(db.Model):
    __tablename__ = 'tournaments'

    id = db.Column(db.Integer, primary_key=True)
    owner_user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(200), nullable=True)
    visibility = db.Column(db.String(20), nullable=False, default='private')
    format = db.Column(db.String(40), nullable=False, default='round_robin')
    scoring_rules_id = db.Column(db.Integer, db.ForeignKey('scoring_rules.id'), nullable=False)
    is_doubles = db.Column(db.Boolean, nullable=False, default=True)
    status = db.Column(db.String(20), nullable=False, default='draft')
    created_at = db.Column(db.DateTime, default=lambda: utcnow_naive())

    __table_args__ = (
        db.Index('ix_tournaments_owner_created', 'owner_user_id', 'created_at'),
    )

    owner = db.relationship('User', backref='tournaments')
    scoring_rules = db.relationship('ScoringRules')

    def to_dict(self):
        return {
            'id': self.id,
            'owner_user_id': self.owner_user_id,
            'name': self.name,
            'location': self.location,
            'visibility': self.visibility,
            'format': self.format,
            'scoring_rules_id': self.scoring_rules_id,
            'is_doubles': self.is_doubles,
            'status': self.status,
            'created_at': isoformat_or_none(self.created_at),
        }

    def to_summary_dict(self):
        data = self.to_dict()
        data['golden_point'] = self.scoring_rules.golden_point
        data['tiebreak_type'] = self.scoring_rules.tiebreak_type
        return data

    def to_detail_dict(self):
        data = self.to_dict()
        data['scoring_rules'] = self.scoring_rules.to_dict()
        return data


class TournamentPlayer(db.Model):
    """Enrollment of an address-book player into a tournament."""
    __tablename__ = 'tournament_players'

    id = db.Column(db.Integer, primary_key=True)
    tournament_id = db.Column(db.Integer, db.ForeignKey('tournaments.id'), nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False)
    accepted = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.UniqueConstraint('tournament_id', 'player_id', name='uq_tournament_players_pair'),
    )

    tournament = db.relationship('Tournament', backref='enrollments')
    player = db.relationship('Player')

    def to_dict(self):
        return {
            'id': self.id,
            'player_id': self.player_id,
            'display_name': self.player.display_name if self.player else None,
            'email': self.player.email if self.player else None,
            'accepted': self.accepted,
        }
