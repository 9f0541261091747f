# Request handlers for the authlib handshake
