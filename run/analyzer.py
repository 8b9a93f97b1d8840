import os
import sys

from GrammarAnalyzer.Controller import GrammarController
from GrammarAnalyzer.Logger import Logger, LogLevel


if __name__ == '__main__':
	path: str = sys.argv[1] if len(sys.argv) > 1 else os.path.join(os.path.dirname(__file__), 'grammar.kvp')
	words: list[str] = sys.argv[2:] if len(sys.argv) > 2 else ['aab', 'bbb', 'ba', '']
	logger: Logger = Logger(sys.stderr, level=LogLevel.INFO)
	controller: GrammarController = GrammarController.from_file(path, logger=logger)

	print(controller.grammar_text())
	print()
	print(controller.requirements_report())
	print()

	for word in words:
		print(controller.analyze(word).report())

	print(f'General tree (depth {controller.tree_depth}):')
	print(controller.general_tree().render())
	logger.detach()
