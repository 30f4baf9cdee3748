# Webhook route documentation for Stripe integration
stripe_webhook_responses = {
    200: {
        "description": "Event verified and handled",
        "content": {
            "application/json": {
                "examples": {
                    "received": {
                        "summary": "Event handled",
                        "value": {
                            "success": True,
                            "message": "Webhook received",
                        },
                    },
                }
            }
        },
    },
    400: {
        "description": "Bad Request - Signature or event type error",
        "content": {
            "application/json": {
                "examples": {
                    "missing_signature": {
                        "summary": "Missing Stripe-Signature header",
                        "value": {
                            "success": False,
                            "message": "No signature found in request",
                        },
                    },
                    "invalid_signature": {
                        "summary": "Invalid webhook signature or payload",
                        "value": {
                            "success": False,
                            "message": "Invalid webhook signature",
                        },
                    },
                    "unhandled_event": {
                        "summary": "Event type has no handler",
                        "value": {
                            "success": False,
                            "message": "Unhandled webhook event",
                        },
                    },
                }
            }
        },
    },
    500: {
        "description": "Handled event could not be applied; Stripe will retry",
        "content": {
            "application/json": {
                "examples": {
                    "user_not_found": {
                        "summary": "Checkout session references an unknown user",
                        "value": {
                            "success": False,
                            "message": "User not found",
                        },
                    },
                    "subscription_not_found": {
                        "summary": "No local subscription for the Stripe customer",
                        "value": {
                            "success": False,
                            "message": "Subscription not found",
                        },
                    },
                    "internal_error": {
                        "summary": "Unexpected server error",
                        "value": {
                            "success": False,
                            "message": "Internal server error",
                        },
                    },
                }
            }
        },
    },
}
