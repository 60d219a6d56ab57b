import logging
import sqlite3

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from config import Config
from models.post import Post
from repositories.errors import PostNotFoundError
from repositories.post_repository import PostRepository
from utils.dbconnection import DatabaseConnection, overflows_sqlite_integer
from utils.schema import create_tables

logger = logging.getLogger(__name__)


def init_db(db_path):
    try:
        with DatabaseConnection(db_path) as db:
            create_tables(db)
    except sqlite3.Error:
        logger.exception("Database initialization FAILED")
        raise


def post_to_dict(post):
    return {
        'id': post.id,
        'title': post.title,
        'content': post.content,
        'views': post.views,
        'account_id': post.account_id,
    }


def post_from_payload(payload, post_id=None):
    """Builds a Post from a JSON body, rejecting missing or ill-typed fields."""
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object.")

    for field in ('title', 'content'):
        if not isinstance(payload.get(field), str):
            raise BadRequest(f"'{field}' is required and must be a string.")

    views = payload.get('views', 0)
    account_id = payload.get('account_id')
    for field, value in (('views', views), ('account_id', account_id)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise BadRequest(f"'{field}' must be an integer.")
        if overflows_sqlite_integer(value):
            raise BadRequest(f"'{field}' is out of range.")
    if views < 0:
        raise BadRequest("'views' must not be negative.")

    return Post(id=post_id, title=payload['title'], content=payload['content'],
                views=views, account_id=account_id)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(level=app.config['LOG_LEVEL'])

    with app.app_context():
        init_db(current_app.config['DATABASE'])

    def open_db():
        return DatabaseConnection(current_app.config['DATABASE'])

    @app.errorhandler(BadRequest)
    def bad_request(e):
        return jsonify({'error': e.description}), 400

    @app.errorhandler(PostNotFoundError)
    def post_not_found(e):
        return jsonify({'error': str(e)}), 404

    @app.errorhandler(sqlite3.IntegrityError)
    def integrity_error(e):
        app.logger.warning("Integrity error: %s", e)
        return jsonify({'error': f"Constraint violated: {e}"}), 409

    @app.errorhandler(sqlite3.Error)
    def database_error(e):
        app.logger.exception("Database error")
        return jsonify({'error': "Database error."}), 500

    @app.route('/health')
    def health_check():
        return jsonify({'status': 'healthy'})

    @app.route('/posts', methods=['GET'])
    def list_posts():
        with open_db() as db:
            posts = PostRepository(db).all()
        return jsonify([post_to_dict(post) for post in posts])

    @app.route('/posts/<int:post_id>', methods=['GET'])
    def show_post(post_id):
        with open_db() as db:
            post = PostRepository(db).find(post_id)
        return jsonify(post_to_dict(post))

    @app.route('/posts', methods=['POST'])
    def create_post():
        post = post_from_payload(request.get_json(silent=True))
        with open_db() as db:
            new_id = PostRepository(db).create(post)
        app.logger.info("Created post %s", new_id)
        return jsonify({'id': new_id}), 201

    @app.route('/posts/<int:post_id>', methods=['PUT'])
    def update_post(post_id):
        post = post_from_payload(request.get_json(silent=True), post_id=post_id)
        with open_db() as db:
            repository = PostRepository(db)
            # update is a no-op on a missing id, so check first to report 404
            repository.find(post_id)
            repository.update(post)
            updated = repository.find(post_id)
        return jsonify(post_to_dict(updated))

    @app.route('/posts/<int:post_id>', methods=['DELETE'])
    def delete_post(post_id):
        with open_db() as db:
            PostRepository(db).delete(post_id)
        return '', 204

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
