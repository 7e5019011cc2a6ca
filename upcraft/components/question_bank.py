"""Built-in practice questions, keyed by lower-case skill name, in the wire format of /api/assessment/skill/:id."""

QUESTION_BANK = {
    "javascript": [
        {
            "id": 1,
            "question": "What is the output of: console.log(typeof NaN)?",
            "options": [
                {"id": "a", "text": "undefined"},
                {"id": "b", "text": "object"},
                {"id": "c", "text": "number"},
                {"id": "d", "text": "NaN"},
            ],
            "correctAnswer": "c",
            "explanation": "NaN is a special value of the Number type, so typeof NaN returns 'number'.",
            "difficulty": "beginner",
        },
        {
            "id": 2,
            "question": "Which of the following is NOT a primitive data type in JavaScript?",
            "options": [
                {"id": "a", "text": "string"},
                {"id": "b", "text": "boolean"},
                {"id": "c", "text": "array"},
                {"id": "d", "text": "undefined"},
            ],
            "correctAnswer": "c",
            "explanation": "Arrays are objects. The primitives are string, number, boolean, null, undefined, symbol and bigint.",
            "difficulty": "beginner",
        },
        {
            "id": 3,
            "question": "What does the '===' operator do in JavaScript?",
            "options": [
                {"id": "a", "text": "Checks for equality, performing type coercion"},
                {"id": "b", "text": "Checks for equality without type coercion"},
                {"id": "c", "text": "Assigns a value to a variable"},
                {"id": "d", "text": "Checks if one value is greater than another"},
            ],
            "correctAnswer": "b",
            "explanation": "'===' is strict equality: both the value and the type must match.",
            "difficulty": "beginner",
        },
    ],
    "react": [
        {
            "id": 4,
            "question": "What hook would you use to run a side effect in a functional component?",
            "options": [
                {"id": "a", "text": "useState"},
                {"id": "b", "text": "useEffect"},
                {"id": "c", "text": "useContext"},
                {"id": "d", "text": "useReducer"},
            ],
            "correctAnswer": "b",
            "explanation": "useEffect runs side effects such as data fetching, subscriptions or manual DOM changes.",
            "difficulty": "intermediate",
        },
        {
            "id": 5,
            "question": "Which of the following is NOT a rule of React hooks?",
            "options": [
                {"id": "a", "text": "Only call hooks at the top level"},
                {"id": "b", "text": "Only call hooks from React components"},
                {"id": "c", "text": "Hooks can be used inside class components"},
                {"id": "d", "text": "Custom hooks should start with 'use'"},
            ],
            "correctAnswer": "c",
            "explanation": "Hooks only work in function components, never in class components.",
            "difficulty": "intermediate",
        },
    ],
    "node.js": [
        {
            "id": 7,
            "question": "Which architectural pattern splits an application into Model, View and Controller?",
            "options": [
                {"id": "a", "text": "Microservices"},
                {"id": "b", "text": "Event-Driven Architecture"},
                {"id": "c", "text": "MVC"},
                {"id": "d", "text": "SOA"},
            ],
            "correctAnswer": "c",
            "explanation": "MVC separates data (Model), user interface (View) and request handling (Controller).",
            "difficulty": "intermediate",
        },
    ],
    "verbal communication": [
        {
            "id": 6,
            "question": "When explaining a technical concept to a non-technical audience, it's best to:",
            "options": [
                {"id": "a", "text": "Use as much technical jargon as possible to sound professional"},
                {"id": "b", "text": "Use analogies and simple language to make it relatable"},
                {"id": "c", "text": "Speak quickly to cover all technical details"},
                {"id": "d", "text": "Avoid explaining details since they won't understand anyway"},
            ],
            "correctAnswer": "b",
            "explanation": "Analogies and plain language make complex ideas accessible.",
            "difficulty": "beginner",
        },
    ],
    "machine learning": [
        {
            "id": 8,
            "question": "What statistical measure represents the middle value in a data set?",
            "options": [
                {"id": "a", "text": "Mean"},
                {"id": "b", "text": "Median"},
                {"id": "c", "text": "Mode"},
                {"id": "d", "text": "Range"},
            ],
            "correctAnswer": "b",
            "explanation": "The median is the middle value of the sorted data; with an even count it is the mean of the two middle values.",
            "difficulty": "beginner",
        },
    ],
    "team management": [
        {
            "id": 9,
            "question": "What is the main purpose of a project kickoff meeting?",
            "options": [
                {"id": "a", "text": "To celebrate the project's completion"},
                {"id": "b", "text": "To introduce team members and align on project goals and expectations"},
                {"id": "c", "text": "To divide the budget among team members"},
                {"id": "d", "text": "To assign blame for potential failures"},
            ],
            "correctAnswer": "b",
            "explanation": "A kickoff aligns stakeholders on goals, roles, communication and deliverables.",
            "difficulty": "beginner",
        },
    ],
}
