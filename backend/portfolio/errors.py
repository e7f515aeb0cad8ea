from flask import jsonify, request, render_template
from portfolio.domain.exceptions import PortfolioError, NotFound

def register_error_handlers(app):
    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(error):
        if isinstance(error, NotFound) and not request.path.startswith("/api/"):
            return render_template("not_found.html", message=error.message), 404

        app.logger.info("%s on %s: %s", type(error).__name__, request.path, error.message)
        response = jsonify({
            "error": type(error).__name__,
            "message": error.message
        })
        response.status_code = error.status_code
        return response
