"""
PhysioFlow backend

Exercises, patients and programs in a JSON document store;
therapists and accounts in a relational store.
"""
