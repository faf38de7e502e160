"""
Donations app for the Stripe donation flow.

This app handles:
- Publishing the Stripe publishable key to the donation page
- Creating PaymentIntents for donation amounts
- Verifying Stripe webhooks and publishing DonationEvents to Kafka

Usage:
    from donations.services import CustomerResolver

    result = CustomerResolver.resolve(parsed)
"""
