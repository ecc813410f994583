from quizcraft import db, bcrypt
from flask_login import UserMixin


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    is_operator = db.Column(db.Boolean, default=False, nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'is_operator': self.is_operator,
        }


class Player(db.Model):
    """A chat participant. Its id is the participant id the quiz core records."""
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    items = db.relationship('InventoryItem', back_populates='player', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
        }


class InventoryItem(db.Model):
    __tablename__ = 'inventory_item'
    __table_args__ = (db.UniqueConstraint('player_id', 'item_id', name='uq_inventory_player_item'),)
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    item_id = db.Column(db.String(128), nullable=False)
    quantity = db.Column(db.Integer, default=0, nullable=False)
    player = db.relationship('Player', back_populates='items')

    def to_dict(self):
        return {
            'item_id': self.item_id,
            'quantity': self.quantity,
        }
