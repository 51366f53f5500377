"""
Adapters — collaborators the generator core talks to through a contract.

    Prompter           interactive conflict confirmation (base.py)
    ConsolePrompter    click-based terminal prompter (console.py)
    MockPrompter       scripted prompter for tests (mock.py)
    GeneratorRegistry  namespace → generator class lookup (registry.py)
"""
