# Response and status models
