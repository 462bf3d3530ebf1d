"""Handlers for the IRC commands the server understands."""