from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required
from quizcraft import db
from quizcraft.models import User

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the QuizCraft server!'})


@main.route('/users/add', methods=['POST'])
def add_user():
    data = request.get_json(silent=True)
    if not data or 'username' not in data or 'password' not in data:
        return jsonify({'error': 'Missing username or password'}), 400

    if User.query.filter_by(username=data['username']).first():
        return jsonify({'error': 'Username already exists'}), 400

    # The first account on a fresh server becomes the operator
    user = User(username=data['username'], is_operator=User.query.count() == 0)
    user.set_password(data['password'])
    db.session.add(user)
    db.session.commit()

    return jsonify({'message': 'User created successfully', 'user': user.to_dict()}), 201


@main.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(username=data.get('username')).first()
    if user and user.check_password(data.get('password') or ''):
        login_user(user, remember=True)
        return jsonify({'message': 'Logged in successfully.', 'user': user.to_dict()})
    return jsonify({'error': 'Invalid username or password'}), 401


@main.route('/logout')
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully.'})
