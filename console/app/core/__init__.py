SERVICE_NAME = "console"
