from .feedback_routes import feedback_bp

def register_routes(app):
    app.register_blueprint(feedback_bp, url_prefix="/feedback")
