"""bofhd XML-RPC client, transports and error taxonomy."""
