"""Petshop API application package.

In-memory registry of petshops (identified by CNPJ) and the pets each
petshop owns.
"""
