"""Demo question bank used by the in-memory question source."""

from papersmith.models import BloomLevel as B
from papersmith.models import DifficultyLevel as D
from papersmith.models import Question, QuestionType as T, Unit

SEED_UNITS = [
    Unit(id=1, course_id=1, unit_number=1, title="Introduction to Data Structures", topics=["ADTs", "Complexity"]),
    Unit(id=2, course_id=1, unit_number=2, title="Arrays and Linked Lists", topics=["Arrays", "Singly linked lists"]),
    Unit(id=3, course_id=1, unit_number=3, title="Stacks and Queues", topics=["Stacks", "Queues", "Expression evaluation"]),
    Unit(id=4, course_id=1, unit_number=4, title="Trees and Graphs", topics=["Binary trees", "BFS", "DFS"]),
    Unit(id=5, course_id=1, unit_number=5, title="Sorting and Searching", topics=["Quick sort", "Binary search"]),
    Unit(id=6, course_id=2, unit_number=1, title="Introduction to DBMS", topics=["DBMS architecture"]),
    Unit(id=7, course_id=2, unit_number=2, title="ER Model and Relational Model", topics=["ER diagrams", "Keys"]),
    Unit(id=8, course_id=2, unit_number=3, title="SQL and Query Processing", topics=["Joins", "Aggregation"]),
    Unit(id=9, course_id=2, unit_number=4, title="Normalization", topics=["1NF", "2NF", "3NF", "BCNF"]),
    Unit(id=10, course_id=2, unit_number=5, title="Transaction Management", topics=["ACID", "Concurrency control"]),
]

SEED_QUESTIONS = [
    Question(id=1, course_id=1, unit_id=1, text="Define data structure and list its types.", marks=2, bloom_level=B.remember, difficulty=D.easy, question_type=T.short),
    Question(id=2, course_id=1, unit_id=1, text="Explain the difference between linear and non-linear data structures.", marks=2, bloom_level=B.understand, difficulty=D.easy, question_type=T.short),
    Question(id=3, course_id=1, unit_id=2, text="Implement a function to reverse a linked list.", marks=5, bloom_level=B.apply, difficulty=D.medium, question_type=T.long),
    Question(id=4, course_id=1, unit_id=2, text="Write a program to detect a cycle in a linked list.", marks=5, bloom_level=B.apply, difficulty=D.medium, question_type=T.long),
    Question(id=5, course_id=1, unit_id=3, text="Analyze the applications of stack in expression evaluation.", marks=5, bloom_level=B.analyze, difficulty=D.medium, question_type=T.long),
    Question(id=6, course_id=1, unit_id=4, text="Explain BFS and DFS traversal techniques with examples.", marks=10, bloom_level=B.analyze, difficulty=D.hard, question_type=T.descriptive),
    Question(id=7, course_id=1, unit_id=5, text="Compare and analyze various sorting algorithms based on time complexity.", marks=10, bloom_level=B.analyze, difficulty=D.hard, question_type=T.descriptive),
    Question(id=8, course_id=2, unit_id=6, text="What is DBMS? Explain its advantages.", marks=2, bloom_level=B.understand, difficulty=D.easy, question_type=T.short),
    Question(id=9, course_id=2, unit_id=7, text="Design an ER diagram for a library management system.", marks=7, bloom_level=B.create, difficulty=D.medium, question_type=T.long),
    Question(id=10, course_id=2, unit_id=8, text="Write SQL queries to perform join operations.", marks=5, bloom_level=B.apply, difficulty=D.medium, question_type=T.long),
    Question(id=11, course_id=1, unit_id=3, text="List the operations supported by a circular queue.", marks=2, bloom_level=B.remember, difficulty=D.easy, question_type=T.short),
    Question(id=12, course_id=1, unit_id=4, text="Construct a binary search tree from the keys 50, 30, 70, 20, 40, 60, 80.", marks=5, bloom_level=B.apply, difficulty=D.medium, question_type=T.long),
    Question(id=13, course_id=1, unit_id=5, text="Which search technique requires the input to be sorted?", marks=1, bloom_level=B.remember, difficulty=D.easy, question_type=T.mcq),
    Question(id=14, course_id=2, unit_id=9, text="Normalize the given relation up to BCNF and justify each step.", marks=10, bloom_level=B.evaluate, difficulty=D.hard, question_type=T.descriptive),
    Question(id=15, course_id=2, unit_id=10, text="State the ACID properties of a transaction.", marks=2, bloom_level=B.remember, difficulty=D.easy, question_type=T.short),
]
