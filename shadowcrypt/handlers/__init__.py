"""shadowcrypt.handlers -- holds implementations of the supported crypt schemes"""
