"""
Parcel Server — Services Layer
===============================

Service Inventory:
    - ParcelService:   parcel lifecycle, rider assignment, delivery progress
    - UserService:     registration, search, roles
    - RiderService:    rider applications and activation
    - TrackingService: append-only tracking log
    - PaymentService:  payment intents and the payment log

Provider Inventory:
    - IdentityProvider (abstract) → FirebaseIdentityProvider
    - PaymentProvider  (abstract) → StripePaymentProvider

Services are stateless singletons; the request's DocumentStore is passed to
every call so that all writes of a request share one transaction.
"""
