# AI instance, media handling and flows
