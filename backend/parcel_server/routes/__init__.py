"""
Parcel Server — API Routes Package
===================================

Route Inventory:
    - parcels.py:    /parcels, /parcels/{id}/..., /rider/...
    - users.py:      /users, /users/search, /users/{email}/role, /users/{id}/role
    - riders.py:     /riders, /riders/available|pending|active, /riders/{id}/status
    - trackings.py:  /trackings, /trackings/{tracking_id}
    - payments.py:   /create-payment-intent, /payments
    - health.py:     /, /health

Routes stay thin: resolve the caller, call a service, shape the response.
Business rules live in parcel_server.services.
"""
