from flask_sqlalchemy import SQLAlchemy
from flask_smorest import Api

db = SQLAlchemy()

api = Api()

redis_client = None

mongo_client = None
mongo_db = None
