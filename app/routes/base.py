from datetime import datetime

from flask_smorest import Blueprint

base_blueprint = Blueprint(
    'base',
    __name__,
    url_prefix='/',
    description='Service status'
)


@base_blueprint.route('health', methods=['GET'])
def health_check():
    return {
        "status": "healthy",
        "service": "yourtube",
        "time": datetime.utcnow().isoformat()
    }
