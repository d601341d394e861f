"""httpr - HTTP request logger and transient failure simulator"""
