import azure.functions as func

from tvtracker_recommendation_service.blueprints import favorites_bp, recommendations_bp, shows_bp

app = func.FunctionApp()

app.register_blueprint(favorites_bp)
app.register_blueprint(recommendations_bp)
app.register_blueprint(shows_bp)
