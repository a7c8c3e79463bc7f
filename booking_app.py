from flask import Flask, request, jsonify, make_response
from flask_restx import Api, Resource, fields, Namespace
from appointment_booking import CORS_HEADERS, handle_booking_request

APP_PORT = 3000

app = Flask(__name__)
api = Api(app, doc='/docs')  # Swagger UI will be available at /docs

# Define a Namespace for the API
ns = Namespace('api', description='Operations related to appointments')


appointment_input_model = ns.model('AppointmentCreate', {
    'date': fields.String(required=True, description='Meeting date in YYYY-MM-DD format'),
    'category': fields.String(required=True, description='Comma-separated language preferences, e.g. "es,en"'),
})

appointment_response_model = ns.model('AppointmentResponse', {
    'status': fields.String(description='Result status', enum=['success', 'error']),
    'message': fields.String(description='Human readable message, store message on failure'),
    'data': fields.Raw(description='Created record or search results from the store'),
})


@app.after_request
def add_cors_headers(response):
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value
    return response


def to_response(status_code, payload):
    if payload is None:
        return make_response('', status_code)
    return make_response(jsonify(payload), status_code)


@ns.route('/appointments')
class AppointmentsResource(Resource):
    @ns.doc('search_appointments')
    @ns.param('date', 'Meeting date in YYYY-MM-DD format')
    @ns.param('category', 'Comma-separated language preferences')
    @ns.response(200, 'Fetched appointments', appointment_response_model)
    def get(self):
        """Search appointments by date and languages"""
        status_code, payload = handle_booking_request('GET', request.args.to_dict())
        return to_response(status_code, payload)

    @ns.doc('create_appointment')
    @ns.expect(appointment_input_model)
    @ns.response(201, 'Appointment created', appointment_response_model)
    def post(self):
        """Create an appointment adapted to the current object schema"""
        if request.is_json:
            data = request.get_json(silent=True)
            params = data if isinstance(data, dict) else {}
        else:
            params = request.form.to_dict()
        status_code, payload = handle_booking_request('POST', params)
        return to_response(status_code, payload)

    def options(self):
        status_code, payload = handle_booking_request('OPTIONS', {})
        return to_response(status_code, payload)


# Register the namespace with the API
api.add_namespace(ns)

if __name__ == '__main__':
    app.run(debug=True, port=APP_PORT)
